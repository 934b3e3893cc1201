"""
Chainable locators.

A Queryable is an address plus the transport it will be sent through. Two
ways to grow one:

  - extend(segment) appends to this locator's own address and returns it.
    Used for read shaping (select/expand/top...) on the object that will
    eventually be sent.
  - branch(factory, segment, use_root_address) copies the address into a
    new locator and appends there. Used for one-off actions (add, delete,
    recycle) so the source locator stays reusable.

Each locator remembers the address it was constructed with (its root). With
use_root_address a branch starts from the root, dropping whatever extend()
accumulated.

Only get/post suspend; everything else is synchronous.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

from sprest.sprest_config import runtime_config
from sprest.sprest_errors import AddressConstructionError
from sprest.sprest_odata import ActionResult, ODataDefaultParser, ODataParser
from sprest.sprest_path import ResourceAddress, function_segment, key_segment
from sprest.sprest_serialize import serialize
from sprest.sprest_types import typed

logger = logging.getLogger(__name__)

Q = TypeVar("Q", bound="Queryable")

# Survives every derivation: it tells the service which site a cross-domain
# request is really aimed at.
TARGET_OPTION = "@target"


class Queryable:
    def __init__(self, base_url: Union[str, 'Queryable'], path: Optional[str] = None):
        if isinstance(base_url, Queryable):
            parent = base_url
            self._parent_url = parent.url
            self._context = parent._context
            address = parent._address.without_query()
            target = parent._address.query_value(TARGET_OPTION)
            if target is not None:
                address = address.merge_query(TARGET_OPTION, target)
        else:
            self._parent_url = base_url
            self._context = None
            address = ResourceAddress.parse(base_url)
        address = address.append(path)
        self._root = address
        self._address = address

    # -- identity --------------------------------------------------------

    @property
    def address(self) -> ResourceAddress:
        return self._address

    @property
    def url(self) -> str:
        """The path of the current address, without query options."""
        return self._address.path

    @property
    def parent_url(self) -> str:
        return self._parent_url

    def __str__(self) -> str:
        return str(self._address)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._address}>"

    def in_context(self: Q, transport: Any) -> Q:
        """Bind the transport requests from this locator (and its descendants) go through."""
        self._context = transport
        return self

    # -- composition -----------------------------------------------------

    def extend(self: Q, segment: str) -> Q:
        self._address = self._address.append(segment)
        return self

    def branch(self, factory: Type[Q], segment: Optional[str] = None, use_root_address: bool = False) -> Q:
        source = self._root if use_root_address else self._address
        target = self._address.query_value(TARGET_OPTION)
        if target is not None:
            source = source.merge_query(TARGET_OPTION, target)
        child = factory(self, None)
        child._rehome(source.append(segment))
        return child

    def get_parent(self, factory: Type[Q], base_url: Optional[str] = None, path: Optional[str] = None) -> Q:
        """A locator of another type at `base_url` (default: this locator's parent), same transport."""
        parent = factory(base_url if base_url is not None else self.parent_url, path)
        parent._context = self._context
        return parent

    def _rehome(self, address: ResourceAddress) -> None:
        self._root = address
        self._address = address

    def _shape(self: Q, option: str, value: Any) -> Q:
        if value == "":
            return self
        self._address = self._address.merge_query(option, value)
        return self

    # -- requests --------------------------------------------------------

    async def get(self, parser: Optional[ODataParser] = None) -> Any:
        return await self._request("GET", parser=parser)

    async def get_as(self, parser: ODataParser) -> Any:
        return await self._request("GET", parser=parser)

    async def post(self, body: Any = None, headers: Optional[Dict[str, str]] = None,
                   parser: Optional[ODataParser] = None) -> Any:
        return await self._request("POST", body=body, headers=headers, parser=parser)

    async def post_as(self, parser: ODataParser, body: Any = None,
                      headers: Optional[Dict[str, str]] = None) -> Any:
        return await self._request("POST", body=body, headers=headers, parser=parser)

    async def _request(self, method: str, *, body: Any = None, headers: Optional[Dict[str, str]] = None,
                       parser: Optional[ODataParser] = None) -> Any:
        url = str(self._address)
        transport = self._context if self._context is not None else runtime_config.transport()
        payload = body if body is None or isinstance(body, (str, bytes)) else serialize(body, fmt='json')
        logger.debug("%s %s headers=%s", method, url, sorted((headers or {}).keys()))
        raw = await transport.send(method, url, headers=dict(headers or {}), body=payload)
        return (parser or ODataDefaultParser()).parse(raw, self)


class QueryableCollection(Queryable):
    """A locator for a set of entities; adds OData list shaping."""

    def select(self: Q, *fields: str) -> Q:
        return self._shape("$select", ",".join(fields))

    def expand(self: Q, *fields: str) -> Q:
        return self._shape("$expand", ",".join(fields))

    def filter(self: Q, expr: str) -> Q:
        return self._shape("$filter", expr)

    def top(self: Q, n: int) -> Q:
        return self._shape("$top", int(n))

    def skip(self: Q, n: int) -> Q:
        return self._shape("$skip", int(n))

    def order_by(self: Q, field: str, ascending: bool = True) -> Q:
        return self._shape("$orderby", f"{field} {'asc' if ascending else 'desc'}")

    def _item(self, factory: Type[Q], key: Any) -> Q:
        """`collection(key)` addressed as an instance of `factory`."""
        return factory(self, key_segment(key))

    def _item_by(self, factory: Type[Q], function: str, *args: Any) -> Q:
        """`collection/function(args)` addressed as an instance of `factory`."""
        return factory(self, function_segment(function, *args))


class QueryableInstance(Queryable):
    """
    A locator for one entity.

    Subclasses set `entity_type_name` (the server type written into
    `__metadata` on update). Kinds that the service addresses by a
    property, and that change address when it changes, also set
    `addressing_key` and implement `_readdress`.
    """
    entity_type_name: Optional[str] = None
    addressing_key: Optional[str] = None

    def select(self: Q, *fields: str) -> Q:
        return self._shape("$select", ",".join(fields))

    def expand(self: Q, *fields: str) -> Q:
        return self._shape("$expand", ",".join(fields))

    async def update(self, properties: Dict[str, Any], entity_type: Optional[str] = None) -> ActionResult:
        type_name = entity_type or self.entity_type_name
        if not type_name:
            raise AddressConstructionError(f"{type(self).__name__} has no entity type name to update with")
        body = typed(type_name, properties)
        data = await self.post(body=body, headers={"X-HTTP-Method": "MERGE"})
        entity = self
        if self.addressing_key is not None and self.addressing_key in properties:
            entity = self._readdress(properties[self.addressing_key])
            logger.debug("%s re-addressed after update: %s", type(self).__name__, entity)
        return ActionResult(data, entity)

    def _readdress(self, value: Any) -> 'QueryableInstance':
        raise NotImplementedError(f"{type(self).__name__} does not support re-addressing")

    async def delete(self, etag: str = "*") -> None:
        await self.branch(type(self), None, True).post(headers={
            "IF-Match": etag,
            "X-HTTP-Method": "DELETE",
        })


__all__ = [
    "Queryable",
    "QueryableCollection",
    "QueryableInstance",
    "TARGET_OPTION",
]
