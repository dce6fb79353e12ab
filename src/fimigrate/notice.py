"""Lifecycle of the migration notice flags.

The flags are created when the tool is installed on a site, flipped by
the batch controller when the last page is processed, and deleted on
uninstall.  An operator may also dismiss the notice without migrating.
"""

from __future__ import annotations

import dataclasses

from fimigrate.models import NoticeState
from fimigrate.observability import get_logger
from fimigrate.store.base import NoticeFlags

log = get_logger("fimigrate.notice")


def install(flags: NoticeFlags) -> NoticeState:
    """Show the migration notice.  Called once when the tool is installed."""
    state = dataclasses.replace(flags.load(), notice_visible=True)
    flags.save(state)
    log.info("Migration notice enabled", extra={"extra_fields": {"op": "install"}})
    return state


def uninstall(flags: NoticeFlags) -> None:
    """Delete both flags so no state is left behind."""
    flags.clear()
    log.info("Migration flags removed", extra={"extra_fields": {"op": "uninstall"}})


def dismiss(flags: NoticeFlags) -> NoticeState:
    """Hide the notice without running the migration."""
    state = dataclasses.replace(flags.load(), notice_visible=False)
    flags.save(state)
    log.info("Migration notice dismissed", extra={"extra_fields": {"op": "dismiss"}})
    return state


def should_show_notice(state: NoticeState) -> bool:
    return state.notice_visible and not state.migration_complete
