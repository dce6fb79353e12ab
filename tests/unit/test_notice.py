"""Tests for fimigrate/notice.py."""

from __future__ import annotations

from fimigrate import notice
from fimigrate.models import NoticeState
from fimigrate.store import InMemoryNoticeFlags


class TestNoticeLifecycle:
    def test_install_shows_notice(self):
        flags = InMemoryNoticeFlags()
        state = notice.install(flags)
        assert state == NoticeState(notice_visible=True, migration_complete=False)
        assert flags.state == state

    def test_install_keeps_completion(self):
        flags = InMemoryNoticeFlags(NoticeState(migration_complete=True))
        assert notice.install(flags).migration_complete is True

    def test_dismiss_hides_notice(self):
        flags = InMemoryNoticeFlags(NoticeState(notice_visible=True))
        assert notice.dismiss(flags) == NoticeState()

    def test_uninstall_clears_both_flags(self):
        flags = InMemoryNoticeFlags(NoticeState(notice_visible=True, migration_complete=True))
        notice.uninstall(flags)
        assert flags.load() == NoticeState()


class TestShouldShowNotice:
    def test_visible_and_incomplete(self):
        assert notice.should_show_notice(NoticeState(notice_visible=True))

    def test_hidden(self):
        assert not notice.should_show_notice(NoticeState())

    def test_complete_hides_notice(self):
        state = NoticeState(notice_visible=True, migration_complete=True)
        assert not notice.should_show_notice(state)
