"""Document API wrapper.

Thin wrapper around the document service's ``/documents`` endpoints.
All HTTP concerns (auth, retries, rate limiting) are delegated to the
transport.  Documents travel with their body already parsed into blocks
(``blockName`` / ``attrs`` / ``innerBlocks``); ``blocks`` is ``null`` for
documents whose body is legacy text.
"""

from __future__ import annotations

from typing import Any

from fimigrate.models import DocumentFilter

from .transport import Transport


class DocumentAPI:
    """Synchronous wrapper for the document endpoints.

    Parameters
    ----------
    transport:
        A configured :class:`Transport` instance.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def count(self, selection: DocumentFilter) -> int:
        """Return the number of documents matching *selection*.

        ``GET /documents/count`` answers ``{"total": <int>}``.
        """
        data = self._transport.request(
            "GET", "/documents/count", params=selection.to_params(),
        )
        return int(data.get("total", 0))

    def list_page(
        self,
        selection: DocumentFilter,
        offset: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* documents matching *selection* from *offset*.

        Results are ordered by document id so that offsets are stable
        across calls.
        """
        params = selection.to_params()
        params.update({"offset": offset, "limit": limit, "orderby": "id", "order": "asc"})
        data = self._transport.request("GET", "/documents", params=params)
        return list(data.get("results", []))

    def retrieve(self, document_id: Any) -> dict[str, Any]:
        """Retrieve one document by id."""
        return self._transport.request("GET", f"/documents/{document_id}")

    def update_blocks(
        self,
        document_id: Any,
        blocks: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Replace the body of a document with *blocks*.

        Returns the updated document object.
        """
        return self._transport.request(
            "PATCH", f"/documents/{document_id}", json={"blocks": blocks},
        )
