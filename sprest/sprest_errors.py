"""
Exception types raised by sprest.

Three families surface to callers:

  - AddressConstructionError: a locator could not be built (missing base,
    bad literal, no self-address in a reply). Never reaches the network.
  - TransportError: the service answered with a non-2xx status, or the
    connection failed.
  - ProtocolShapeError: the service accepted the request but the reply does
    not have the shape the operation needs.
"""

from typing import Any, Optional


class SPRestError(Exception):
    """Root of every error raised by sprest."""
    pass


class AddressConstructionError(SPRestError, ValueError):
    def __init__(self, message: str, segment: Any = None):
        super().__init__(message)
        self.segment = segment


class TransportError(SPRestError):
    def __init__(self, message: str, *, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class ProtocolShapeError(SPRestError):
    def __init__(self, message: str, envelope: Any = None):
        super().__init__(message)
        self.envelope = envelope


class UnresolvedAddressError(AddressConstructionError, ProtocolShapeError):
    """A reply carried no usable self-address (no __metadata.uri, odata.editLink or odata.id)."""
    def __init__(self, message: str, envelope: Any = None):
        SPRestError.__init__(self, message)
        self.segment = None
        self.envelope = envelope


__all__ = [
    "SPRestError",
    "AddressConstructionError",
    "TransportError",
    "ProtocolShapeError",
    "UnresolvedAddressError",
]
