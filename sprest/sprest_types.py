from enum import IntEnum
from typing import Dict, TypedDict

EMPTY_GUID = "00000000-0000-0000-0000-000000000000"


class SharingLinkKind(IntEnum):
    UNINITIALIZED = 0
    DIRECT = 1
    ORGANIZATION_VIEW = 2
    ORGANIZATION_EDIT = 3
    ANONYMOUS_VIEW = 4
    ANONYMOUS_EDIT = 5
    FLEXIBLE = 6


class SharingRole(IntEnum):
    NONE = 0
    VIEW = 1
    EDIT = 2
    OWNER = 3


class RoleType(IntEnum):
    NONE = 0
    GUEST = 1
    READER = 2
    CONTRIBUTOR = 3
    WEB_DESIGNER = 4
    ADMINISTRATOR = 5
    EDITOR = 6


class BasePermissions(TypedDict):
    """64-bit permission mask split in two 32-bit halves, as the service encodes it."""
    Low: int
    High: int


def typed(type_name: str, values: Dict) -> Dict:
    """Attach a `__metadata` type annotation to a body fragment."""
    return {"__metadata": {"type": type_name}, **values}
