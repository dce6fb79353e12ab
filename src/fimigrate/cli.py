"""Command-line driver for fimigrate.

Usage::

    fimigrate --base-url https://cms.example.com/api --token "$FIM_TOKEN" count
    fimigrate page --offset 0 --limit 20
    fimigrate run --yes
    fimigrate status

``--base-url`` and ``--token`` fall back to the ``FIM_BASE_URL`` and
``FIM_TOKEN`` environment variables.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import click

from fimigrate import notice
from fimigrate.api import DocumentAPI, OptionAPI, Transport
from fimigrate.batch import BatchController
from fimigrate.config import DEFAULT_DOC_TYPES, MigrationConfig
from fimigrate.errors import FimError
from fimigrate.observability import get_logger, set_level
from fimigrate.runner import MigrationRunner, Progress
from fimigrate.store import HttpDocumentStore, HttpNoticeFlags
from fimigrate.store.base import DocumentStore, NoticeFlags

log = get_logger("fimigrate")


@dataclass
class Backend:
    """The store, the flags, and how to release them."""

    store: DocumentStore
    flags: NoticeFlags
    close: Callable[[], None] = field(default=lambda: None)


def build_backend(config: MigrationConfig) -> Backend:
    """Connect to the document service described by *config*."""
    transport = Transport(config)
    return Backend(
        store=HttpDocumentStore(DocumentAPI(transport)),
        flags=HttpNoticeFlags(OptionAPI(transport)),
        close=transport.close,
    )


class _State:
    def __init__(self, config: MigrationConfig) -> None:
        self.config = config
        self._backend: Backend | None = None

    def backend(self) -> Backend:
        if self._backend is None:
            self._backend = build_backend(self.config)
        return self._backend

    def controller(self) -> BatchController:
        backend = self.backend()
        return BatchController(backend.store, backend.flags, self.config)

    def close(self) -> None:
        if self._backend is not None:
            self._backend.close()


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _fail(exc: FimError) -> click.ClickException:
    log.error(
        "Command failed",
        extra={"extra_fields": {"error_code": exc.code, "error": exc.message}},
    )
    return click.ClickException(exc.message)


@click.group()
@click.option("--base-url", envvar="FIM_BASE_URL", default="http://localhost:8080/api",
              show_default=True, help="Document service API root.")
@click.option("--token", envvar="FIM_TOKEN", default="", help="API token.")
@click.option("--type", "doc_types", multiple=True,
              help="Document type to include (repeatable). Default: post, recipe.")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--debug-dump", is_flag=True, help="Dump redacted API traffic to stderr.")
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str,
    token: str,
    doc_types: tuple[str, ...],
    log_level: str,
    debug_dump: bool,
) -> None:
    """Remove body images that duplicate a document's featured image."""
    set_level(log_level)
    try:
        config = MigrationConfig(
            token=token,
            base_url=base_url,
            doc_types=list(doc_types) or list(DEFAULT_DOC_TYPES),
            debug_dump_payload=debug_dump,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    state = _State(config)
    ctx.obj = state
    ctx.call_on_close(state.close)


@main.command()
@click.pass_obj
def count(state: _State) -> None:
    """Print the number of eligible documents."""
    try:
        result = state.controller().count()
    except FimError as exc:
        raise _fail(exc) from exc
    _echo_json(result.to_dict())


@main.command()
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--limit", type=click.IntRange(min=0), default=None,
              help="Page size. Default: the configured page size.")
@click.pass_obj
def page(state: _State, offset: int, limit: int | None) -> None:
    """Process one page of eligible documents and print the result."""
    try:
        result = state.controller().process_page(offset, limit)
    except FimError as exc:
        raise _fail(exc) from exc
    _echo_json(result.to_dict())


@main.command()
@click.option("--page-size", type=click.IntRange(min=1), default=None)
@click.option("--delay", type=click.FloatRange(min=0), default=None,
              help="Seconds to wait between pages.")
@click.option("--offset", "start_offset", type=click.IntRange(min=0), default=0)
@click.option("--max-pages", type=click.IntRange(min=1), default=None)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def run(
    state: _State,
    page_size: int | None,
    delay: float | None,
    start_offset: int,
    max_pages: int | None,
    yes: bool,
) -> None:
    """Migrate every eligible document, page by page."""
    if not yes:
        click.confirm(
            "This will migrate all documents with a duplicated first image. Continue?",
            abort=True,
        )

    def on_progress(progress: Progress) -> None:
        for line in progress.page.log:
            click.echo(line)
        click.echo(progress.describe())

    runner = MigrationRunner(
        state.controller(), page_size=page_size, delay=delay, max_pages=max_pages,
    )
    try:
        summary = runner.run(on_progress=on_progress, start_offset=start_offset)
    except FimError as exc:
        raise _fail(exc) from exc

    if summary.complete:
        click.echo("Migration complete!")
    else:
        click.echo(f"Stopped after {summary.pages} pages; resume with --offset "
                   f"{start_offset + summary.processed}.")
    click.echo(
        f"Successfully migrated {summary.migrated} documents. "
        f"{summary.skipped} documents skipped."
    )


@main.command()
@click.pass_obj
def status(state: _State) -> None:
    """Print the notice flags."""
    try:
        flags = state.backend().flags.load()
    except FimError as exc:
        raise _fail(exc) from exc
    _echo_json({
        "notice_visible": flags.notice_visible,
        "migration_complete": flags.migration_complete,
        "show_notice": notice.should_show_notice(flags),
    })


@main.command()
@click.pass_obj
def install(state: _State) -> None:
    """Enable the migration notice."""
    try:
        notice.install(state.backend().flags)
    except FimError as exc:
        raise _fail(exc) from exc
    click.echo("Migration notice enabled.")


@main.command()
@click.pass_obj
def uninstall(state: _State) -> None:
    """Remove the migration flags."""
    try:
        notice.uninstall(state.backend().flags)
    except FimError as exc:
        raise _fail(exc) from exc
    click.echo("Migration flags removed.")


@main.command()
@click.pass_obj
def dismiss(state: _State) -> None:
    """Hide the migration notice without migrating."""
    try:
        notice.dismiss(state.backend().flags)
    except FimError as exc:
        raise _fail(exc) from exc
    click.echo("Migration notice dismissed.")


if __name__ == "__main__":
    main()
