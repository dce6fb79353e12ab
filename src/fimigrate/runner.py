"""Migration driver: sequences pages until the eligible set is exhausted.

The batch controller handles one page per call; something has to call it
repeatedly.  :class:`MigrationRunner` is that caller.  It counts the
eligible documents for progress reporting, then requests pages, advancing
the offset by the number of documents each page processed and pausing
between pages, until a page reports completion.

Progress is reported through an optional callback receiving a
:class:`Progress` after every page.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from fimigrate.batch import BatchController
from fimigrate.models import PageResult, RunSummary
from fimigrate.observability import get_logger

log = get_logger("fimigrate.runner")


@dataclass
class Progress:
    """Progress after one page.

    Attributes
    ----------
    processed:
        Documents processed so far, across pages.
    total:
        Eligible documents counted at the start of the run.
    page:
        The page that was just processed.
    """

    processed: int
    total: int
    page: PageResult

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 100
        return min(100, round(self.processed * 100 / self.total))

    def describe(self) -> str:
        return f"Progress: {self.processed}/{self.total} ({self.percentage}%)"


class MigrationRunner:
    """Drive a :class:`BatchController` over the whole eligible set.

    Parameters
    ----------
    controller:
        The controller to drive.
    page_size:
        Documents per page.  Defaults to the controller's configured page
        size.
    delay:
        Seconds to pause between pages.  Defaults to the configured
        ``page_delay_seconds``.
    sleep:
        Sleep function, injectable for tests.
    max_pages:
        Optional cap on the number of pages requested in this run.  The
        run can be resumed later from :attr:`RunSummary.processed`.
    """

    def __init__(
        self,
        controller: BatchController,
        page_size: int | None = None,
        delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        max_pages: int | None = None,
    ) -> None:
        config = controller.config
        self._controller = controller
        self._page_size = page_size if page_size is not None else config.page_size
        self._delay = delay if delay is not None else config.page_delay_seconds
        self._sleep = sleep
        self._max_pages = max_pages
        if self._page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self._page_size}")

    def run(
        self,
        on_progress: Callable[[Progress], None] | None = None,
        start_offset: int = 0,
    ) -> RunSummary:
        """Process pages until the controller reports completion.

        Store failures propagate; the summary of pages already processed
        is lost with them, but the migrations they wrote remain in effect
        and a new run may start again from any offset.
        """
        summary = RunSummary(total=self._controller.count().total)
        offset = start_offset

        while True:
            page = self._controller.process_page(offset, self._page_size)
            summary.pages += 1
            summary.processed += page.processed
            summary.migrated += page.migrated
            summary.skipped += page.skipped
            summary.log.extend(page.log)
            offset += page.processed

            if on_progress is not None:
                on_progress(Progress(processed=offset, total=summary.total, page=page))

            if page.complete:
                summary.complete = page.complete
                break
            if self._max_pages is not None and summary.pages >= self._max_pages:
                break
            if self._delay > 0:
                self._sleep(self._delay)

        log.info(
            "Migration run finished",
            extra={
                "extra_fields": {
                    "op": "run",
                    "total": summary.total,
                    "processed": summary.processed,
                    "migrated": summary.migrated,
                    "skipped": summary.skipped,
                    "pages": summary.pages,
                    "complete": summary.complete,
                }
            },
        )
        return summary
