"""
Response mapping: envelope normalization, self-address resolution and the
parsers that turn a RawResponse into python values or new locators.

The service wraps payloads differently depending on the metadata level the
request asked for:

    verbose   {"d": {...}}  /  {"d": {"results": [...]}}
    minimal   {...}         /  {"value": [...]}

normalize_envelope() reduces all of these to the bare entity (dict) or the
bare list, once, before anything else looks at the payload.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sprest.sprest_errors import ProtocolShapeError, UnresolvedAddressError
from sprest.sprest_http import RawResponse
from sprest.sprest_path import api_root, combine
from sprest.sprest_serialize import deserialize

logger = logging.getLogger(__name__)

_VALUE_WRAPPER_KEYS = {
    "value", "odata.metadata", "odata.nextLink", "@odata.context", "@odata.nextLink",
}


@dataclass(frozen=True)
class ActionResult:
    """What a create/update/locate operation hands back: the decoded reply and a locator."""
    data: Any
    entity: Any


def normalize_envelope(payload: Any) -> Any:
    match payload:
        case {"d": {"results": list() as results}}:
            return results
        case {"d": d}:
            return d
        case {"value": value} if set(payload) <= _VALUE_WRAPPER_KEYS:
            return value
        case _:
            return payload


def _is_metadata_key(key: str) -> bool:
    return key == "__metadata" or key.startswith("odata.") or key.startswith("@odata.")


def resolve_self_address(envelope: Any, base: Optional[str] = None) -> str:
    """
    Find the address the service reports for an entity.

    Looks at `__metadata.uri` (verbose, absolute), then `odata.editLink`
    (minimal, relative to the `_api` root of `base`), then `odata.id`.
    """
    if not isinstance(envelope, dict):
        raise UnresolvedAddressError("Cannot resolve an address from a non-object reply", envelope)
    meta = envelope.get("__metadata")
    if isinstance(meta, dict) and meta.get("uri"):
        return str(meta["uri"])
    edit = envelope.get("odata.editLink") or envelope.get("@odata.editLink")
    if edit:
        edit = str(edit)
        if "://" in edit:
            return edit
        root = api_root(base) if base else "_api"
        return str(combine(root, edit))
    ident = envelope.get("odata.id") or envelope.get("@odata.id")
    if ident:
        return str(ident)
    raise UnresolvedAddressError(
        "Reply carries no __metadata.uri, odata.editLink or odata.id; cannot address the entity",
        envelope)


def extract_identifier(envelope: Any, key: str = "Id") -> Any:
    if not isinstance(envelope, dict) or envelope.get(key) is None:
        raise ProtocolShapeError(f"Reply has no {key!r} field", envelope)
    return envelope[key]


# --------------------------
# Parsers
# --------------------------

class ODataParser(ABC):
    """Turns a RawResponse into the value a request method returns."""

    @abstractmethod
    def parse(self, raw: RawResponse, source: Any = None) -> Any:
        raise NotImplementedError

    def decode(self, raw: RawResponse) -> Any:
        if raw.status == 204 or not raw.content:
            return None
        try:
            return deserialize(raw.content, content_type=raw.content_type, strict=True)
        except ValueError as e:
            raise ProtocolShapeError(f"Malformed response body: {e}") from e


class ODataDefaultParser(ODataParser):
    def parse(self, raw: RawResponse, source: Any = None) -> Any:
        return normalize_envelope(self.decode(raw))


class ODataRawParser(ODataParser):
    def parse(self, raw: RawResponse, source: Any = None) -> Any:
        return self.decode(raw)


class ODataValueParser(ODataParser):
    """For endpoints that answer with a single primitive (string, bool, number)."""

    def parse(self, raw: RawResponse, source: Any = None) -> Any:
        data = normalize_envelope(self.decode(raw))
        if isinstance(data, dict):
            fields = [v for k, v in data.items() if not _is_metadata_key(k)]
            if len(fields) == 1:
                return fields[0]
            raise ProtocolShapeError("Expected a single value in the reply", data)
        if isinstance(data, list):
            raise ProtocolShapeError("Expected a single value, got a list", data)
        return data


class ODataEntityParser(ODataParser):
    """Re-homes a locator of type `factory` at the address the reply reports."""

    def __init__(self, factory: Callable[..., Any]):
        self.factory = factory

    def parse(self, raw: RawResponse, source: Any = None) -> ActionResult:
        data = normalize_envelope(self.decode(raw))
        if not isinstance(data, dict):
            raise ProtocolShapeError("Expected a single entity in the reply", data)
        return self.wrap(data, source)

    def wrap(self, data: dict, source: Any = None) -> ActionResult:
        url = resolve_self_address(data, source.url if source is not None else None)
        logger.debug("re-homing %s at %s", self.factory.__name__, url)
        if source is not None:
            entity = source.get_parent(self.factory, url, None)
        else:
            entity = self.factory(url, None)
        return ActionResult(data, entity)


class ODataEntityArrayParser(ODataEntityParser):
    def parse(self, raw: RawResponse, source: Any = None) -> list:
        data = normalize_envelope(self.decode(raw))
        if not isinstance(data, list):
            raise ProtocolShapeError("Expected a list of entities in the reply", data)
        return [self.wrap(d, source) for d in data]


__all__ = [
    "ActionResult",
    "normalize_envelope",
    "resolve_self_address",
    "extract_identifier",
    "ODataParser",
    "ODataDefaultParser",
    "ODataRawParser",
    "ODataValueParser",
    "ODataEntityParser",
    "ODataEntityArrayParser",
]
