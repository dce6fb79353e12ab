"""Option API wrapper.

Site options are small named values stored by the document service.
The migration keeps its two notice flags there.
"""

from __future__ import annotations

from typing import Any

from fimigrate.errors import FimNotFoundError

from .transport import Transport


class OptionAPI:
    """Synchronous wrapper for the ``/options/{name}`` endpoints.

    Parameters
    ----------
    transport:
        A configured :class:`Transport` instance.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of option *name*, or *default* when unset."""
        try:
            data = self._transport.request("GET", f"/options/{name}")
        except FimNotFoundError:
            return default
        return data.get("value", default)

    def set(self, name: str, value: Any) -> None:
        self._transport.request("PUT", f"/options/{name}", json={"value": value})

    def delete(self, name: str) -> None:
        """Delete option *name*.  Deleting an unset option is not an error."""
        try:
            self._transport.request("DELETE", f"/options/{name}")
        except FimNotFoundError:
            pass
