"""Payload redaction for the transport's debug dump.

A page of documents serialised with its block markup is large and may
carry credentials in headers or option values, so every dump passes
through :func:`redact` first:

* values under credential-like keys are masked;
* the configured token is scrubbed from every string;
* block markup (``innerHTML``, the string slots of ``innerContent``, a
  rendered title) is reduced to ``<markup:N_chars>``;
* any other string longer than 200 characters becomes ``<text:N_chars>``.

Block structure (``blockName``, ``attrs``, ``innerBlocks`` and the
``None`` child slots of ``innerContent``) is left readable.
"""

from __future__ import annotations

import copy
import re
from typing import Any

_CREDENTIAL_KEYS: tuple[str, ...] = (
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
    "nonce",
)

_MARKUP_KEYS: frozenset[str] = frozenset({"innerHTML", "innerContent", "rendered"})

_LONG_TEXT_THRESHOLD = 200

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _is_credential_key(key: Any) -> bool:
    return isinstance(key, str) and any(part in key.lower() for part in _CREDENTIAL_KEYS)


def _scrub(value: str, token: str | None) -> str:
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        value = value.replace(token, placeholder if token not in placeholder else "<redacted>")
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _markup(value: Any) -> Any:
    if isinstance(value, str):
        return f"<markup:{len(value)}_chars>"
    if isinstance(value, list):
        # innerContent: keep the None child slots, collapse the HTML runs.
        return [_markup(item) if item is not None else None for item in value]
    return value


def _walk(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        out: dict = {}
        for key, item in value.items():
            if _is_credential_key(key):
                out[key] = (
                    _scrub(item, token)
                    if isinstance(item, str) and token and token in item
                    else "<redacted>"
                )
            elif key in _MARKUP_KEYS:
                out[key] = _markup(item)
            else:
                out[key] = _walk(item, token)
        return out
    if isinstance(value, list):
        return [_walk(item, token) for item in value]
    if isinstance(value, str):
        value = _scrub(value, token)
        if len(value) > _LONG_TEXT_THRESHOLD:
            return f"<text:{len(value)}_chars>"
    return value


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a copy of *payload* that is safe to print.

    Parameters
    ----------
    payload:
        A request body, response body, or set of headers.
    token:
        The API token.  Any occurrence of this exact string is replaced.

    Returns
    -------
    dict
        A new dictionary; *payload* itself is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer abc123"})
    {'Authorization': '<redacted>'}
    >>> redact({"blockName": "core/image", "innerContent": ["<figure>", None, "</figure>"]})
    {'blockName': 'core/image', 'innerContent': ['<markup:8_chars>', None, '<markup:9_chars>']}
    """
    return _walk(copy.deepcopy(payload), token)
