"""
Resource addresses for the REST/OData service.

A ResourceAddress is a base (absolute url or a relative root such as
`_api/web`), an ordered tuple of path segments and an ordered tuple of query
options. It is immutable: every operation returns a new address, so a
locator can hand its address to a branch without sharing mutable state.

Segment kinds:
  - plain tokens (`folders`, `_api/web`) are joined with `/`;
  - key tokens (`('Reports')`, `(5)`) follow the previous token directly;
  - function tokens (`getByTitle('a/b')`) are kept verbatim, never split.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import quote, unquote

from sprest.sprest_errors import AddressConstructionError

_SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://')
_ORIGIN_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.\-]*://[^/?]+)')
_FUNCTION_RE = re.compile(r'^[A-Za-z_][\w.]*\(.*\)$', re.DOTALL)
_NAME_RE = re.compile(r'^[A-Za-z_][\w.]*$')
_API_RE = re.compile(r'(^|/)_api(?=/|\(|$)', re.IGNORECASE)

# Characters left as-is inside a quoted literal. Everything else is
# percent-encoded (spaces, '#', '?', '%', '&', non-ascii).
LITERAL_SAFE = "/:@!$*+,;=-._~'()"
# Characters left as-is inside a query option value. `&`, `#`, `%`, `+` and
# spaces are always escaped.
QUERY_SAFE = "$'(),:/@=*;"

# Options holding comma separated field lists; repeated calls take the union.
UNION_OPTIONS = ('$select', '$expand')
# Options holding `field [asc|desc]` entries keyed by field.
ORDERED_OPTIONS = ('$orderby',)


# --------------------------
# Literals and tokens
# --------------------------

def odata_literal(value: Any) -> str:
    """Render a python value as an OData literal for use inside a key or function token."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case int():
            return str(int(value))
        case float():
            return str(float(value))
        case str():
            escaped = value.replace("'", "''")
            return "'" + quote(escaped, safe=LITERAL_SAFE) + "'"
        case _:
            raise AddressConstructionError(
                f"Cannot render {type(value).__name__} as an OData literal", segment=value)


def key_segment(value: Any) -> str:
    """`('Reports')` / `(5)` style entity key."""
    if value is None:
        raise AddressConstructionError("An entity key is required", segment=value)
    return f"({odata_literal(value)})"


def function_segment(name: str, *args: Any, **kwargs: Any) -> str:
    """
    Build a function-call token.

      function_segment("getByTitle", "Tasks")          -> getByTitle('Tasks')
      function_segment("addroleassignment",
                       principalid=3, roledefid=5)     -> addroleassignment(principalid=3,roledefid=5)
    """
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise AddressConstructionError(f"Invalid function name: {name!r}", segment=name)
    parts = [odata_literal(a) for a in args]
    parts.extend(f"{k}={odata_literal(v)}" for k, v in kwargs.items())
    return f"{name}({','.join(parts)})"


def api_root(url: Any) -> str:
    """Return the prefix of `url` up to and including its `_api` segment."""
    path = str(url).partition('?')[0]
    m = _API_RE.search(path)
    if not m:
        raise AddressConstructionError(f"No _api root in address: {url!r}", segment=url)
    return path[:m.end()]


def _is_function_token(seg: str) -> bool:
    return bool(_FUNCTION_RE.match(seg))


def _origin(base: str) -> str:
    m = _ORIGIN_RE.match(base)
    return m.group(1) if m else ""


# --------------------------
# Query options
# --------------------------

def _split_fields(value: str) -> List[str]:
    """Split on commas that are not nested inside parentheses."""
    out: List[str] = []
    depth = 0
    current = ""
    for ch in value:
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth = max(0, depth - 1)
        if ch == ',' and depth == 0:
            if current.strip():
                out.append(current.strip())
            current = ""
            continue
        current += ch
    if current.strip():
        out.append(current.strip())
    return out


def _merge_values(key: str, old: str, new: str) -> str:
    k = key.lower()
    if k in UNION_OPTIONS:
        fields = _split_fields(old)
        for f in _split_fields(new):
            if f not in fields:
                fields.append(f)
        return ",".join(fields)
    if k in ORDERED_OPTIONS:
        entries = _split_fields(old)
        for entry in _split_fields(new):
            name = entry.split()[0]
            for i, existing in enumerate(entries):
                if existing.split()[0] == name:
                    entries[i] = entry
                    break
            else:
                entries.append(entry)
        return ",".join(entries)
    return new


def _parse_query(qs: str) -> List[Tuple[str, str]]:
    pairs = []
    for part in qs.split('&'):
        if not part:
            continue
        k, _, v = part.partition('=')
        pairs.append((unquote(k), unquote(v)))
    return pairs


# --------------------------
# ResourceAddress
# --------------------------

@dataclass(frozen=True)
class ResourceAddress:
    base: str
    segments: Tuple[str, ...] = ()
    query: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, url: Any) -> 'ResourceAddress':
        if url is None or not str(url).strip():
            raise AddressConstructionError("A base address is required", segment=url)
        path, _, qs = str(url).strip().partition('?')
        if not path:
            raise AddressConstructionError(f"Address has no path: {url!r}", segment=url)
        return cls(base=path).merge_query_pairs(_parse_query(qs))

    @property
    def path(self) -> str:
        out = self.base.rstrip('/')
        for seg in self.segments:
            if seg.startswith('('):
                out += seg
            else:
                out = f"{out}/{seg}"
        return out or "/"

    @property
    def query_string(self) -> str:
        return "&".join(f"{k}={quote(v, safe=QUERY_SAFE)}" for k, v in self.query)

    def __str__(self) -> str:
        qs = self.query_string
        return f"{self.path}?{qs}" if qs else self.path

    def append(self, *segments: Optional[str]) -> 'ResourceAddress':
        """
        Append segments. A segment may carry its own `?query`, which is merged
        into the accumulated query. An absolute url resets the address; a
        leading `/` resets the path below the current origin. Accumulated
        query options always survive.
        """
        addr = self
        for seg in segments:
            if seg is None:
                continue
            seg = str(seg).strip()
            if not seg:
                continue
            token, _, qs = seg.partition('?')
            if _SCHEME_RE.match(token):
                addr = ResourceAddress(base=token, query=addr.query)
            elif token.startswith('/'):
                addr = ResourceAddress(base=_origin(addr.base) + token, query=addr.query)
            elif token:
                if not (token.startswith('(') or _is_function_token(token)):
                    token = token.strip('/')
                if token:
                    addr = replace(addr, segments=addr.segments + (token,))
            addr = addr.merge_query_pairs(_parse_query(qs))
        return addr

    def merge_query(self, key: str, value: Any) -> 'ResourceAddress':
        value = str(value)
        items = list(self.query)
        for i, (k, v) in enumerate(items):
            if k.lower() == key.lower():
                items[i] = (k, _merge_values(key, v, value))
                return replace(self, query=tuple(items))
        items.append((key, _merge_values(key, "", value)))
        return replace(self, query=tuple(items))

    def merge_query_pairs(self, pairs: Iterable[Tuple[str, str]]) -> 'ResourceAddress':
        addr = self
        for k, v in pairs:
            addr = addr.merge_query(k, v)
        return addr

    def query_value(self, key: str) -> Optional[str]:
        for k, v in self.query:
            if k.lower() == key.lower():
                return v
        return None

    def without_query(self) -> 'ResourceAddress':
        return replace(self, query=())


def combine(base: 'str | ResourceAddress', *segments: Optional[str]) -> ResourceAddress:
    """combine("https://h/_api/web", "folders", "add('x')") -> https://h/_api/web/folders/add('x')"""
    addr = base if isinstance(base, ResourceAddress) else ResourceAddress.parse(base)
    return addr.append(*segments)


__all__ = [
    "ResourceAddress",
    "combine",
    "odata_literal",
    "key_segment",
    "function_segment",
    "api_root",
]
