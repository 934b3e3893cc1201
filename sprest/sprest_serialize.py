from __future__ import annotations

import json
import re
from typing import Any, Optional
import collections.abc

# XML (atom feeds)
import xmltodict


# --------------------------
# Helpers
# --------------------------

def _norm_text(data: bytes | bytearray | str, *, encoding: Optional[str] = None) -> str:
    if isinstance(data, (bytes, bytearray)):
        enc = encoding or 'utf-8'
        try:
            return data.decode(enc, errors='replace')
        except LookupError:
            return data.decode('utf-8', errors='replace')
    if isinstance(data, str):
        return data
    return str(data)


def _encoding_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    m = re.search(r'charset\s*=\s*([^\s;]+)', content_type, re.IGNORECASE)
    if m:
        return m.group(1).strip('"').strip("'")
    return None


def _to_builtin(obj: Any) -> Any:
    # xmltodict returns OrderedDict (Mapping); flatten to plain dicts
    if isinstance(obj, list):
        return [_to_builtin(x) for x in obj]
    if isinstance(obj, collections.abc.Mapping):
        return {k: _to_builtin(v) for k, v in obj.items()}
    return obj


def detect_format(content_type: Optional[str] = None, data_hint: Optional[str] = None) -> Optional[str]:
    """
    Returns 'json' or 'xml'.
    Uses Content-Type first; falls back to sniffing the body when provided.
    """
    ct = (content_type or "").lower()
    if 'json' in ct:
        return 'json'
    if 'xml' in ct:
        return 'xml'

    if data_hint is not None:
        s = data_hint.lstrip()
        if s.startswith('{') or s.startswith('['):
            return 'json'
        if s.startswith('<?xml') or s.startswith('<feed') or s.startswith('<entry'):
            return 'xml'
    return None


# --------------------------
# Public API
# --------------------------

def deserialize(data: bytes | bytearray | str,
                *,
                content_type: Optional[str] = None,
                fmt: Optional[str] = None,
                strict: bool = False) -> Any:
    """
    Convert a response body to python structures.

    JSON and XML bodies become dict/list/scalars, anything else is returned
    as text. With strict=True a body that declares JSON or XML but does not
    parse raises ValueError instead of falling back to text.
    """
    enc = _encoding_from_content_type(content_type)
    text = _norm_text(data, encoding=enc)
    if not text.strip():
        return None
    f = (fmt or detect_format(content_type, text))
    if f == 'json':
        try:
            return json.loads(text)
        except ValueError:
            if strict:
                raise
            return text
    if f == 'xml':
        try:
            return _to_builtin(xmltodict.parse(text))
        except Exception as e:
            if strict:
                raise ValueError(f"Malformed XML body: {e}") from e
            return text
    return text


def serialize(value: Any, *, fmt: str = 'json', pretty: bool = False) -> str:
    """Convert a python value into a request body ('json' or 'xml')."""
    f = (fmt or '').lower()
    built = _to_builtin(value)
    if f == 'json':
        return json.dumps(built, ensure_ascii=False, indent=2 if pretty else None)
    if f == 'xml':
        root = built if isinstance(built, dict) and len(built) == 1 else {"root": built}
        return xmltodict.unparse(root, pretty=pretty)
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


__all__ = [
    "deserialize",
    "serialize",
    "detect_format",
]
