"""
Sharing operations.

The operations are plain coroutines over any locator; the Shareable and
ShareableFolder mixins only forward to them. Nothing here builds addresses
or talks to the transport directly: it is all branch() + post().

Folders are shared through their list item, so ShareableFolder first
resolves `listItemAllFields` to the item's own address.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from sprest.sprest_odata import ODataEntityParser, extract_identifier
from sprest.sprest_path import api_root
from sprest.sprest_queryable import Queryable, QueryableInstance
from sprest.sprest_roles import RoleDefinitions
from sprest.sprest_types import EMPTY_GUID, RoleType, SharingLinkKind, SharingRole


async def get_share_link(q: Queryable, kind: SharingLinkKind = SharingLinkKind.ORGANIZATION_VIEW,
                         expiration: Optional[datetime] = None) -> Any:
    body = {
        "request": {
            "createLink": True,
            "emailData": None,
            "settings": {
                "expiration": expiration.isoformat() if expiration is not None else None,
                "linkKind": int(kind),
            },
        },
    }
    return await q.branch(Queryable, "shareLink", True).post(body=body)


async def share_with(q: Queryable, login_names: Union[str, Iterable[str]], role: SharingRole = SharingRole.VIEW,
                     require_signin: bool = True, propagate_acl: bool = False,
                     email_data: Optional[Dict[str, str]] = None) -> Any:
    """
    Share the addressed item with users or groups.

    Three requests, in order: the item's absolute url, the id of the role
    definition matching `role`, then `SP.Web.ShareObject` at the web root.
    """
    names = [login_names] if isinstance(login_names, str) else list(login_names)
    root = api_root(q.url)

    item = await q.branch(QueryableInstance, None, True).select("EncodedAbsUrl").get()
    role_kind = RoleType.CONTRIBUTOR if role == SharingRole.EDIT else RoleType.READER
    definitions = q.get_parent(RoleDefinitions, root, "web/roledefinitions")
    definition = await definitions.get_by_type(role_kind).select("Id").get()

    body: Dict[str, Any] = {
        "url": extract_identifier(item, "EncodedAbsUrl"),
        "peoplePickerInput": json.dumps([{"Key": name} for name in names]),
        "roleValue": f"role:{extract_identifier(definition, 'Id')}",
        "groupId": 0,
        "propagateAcl": propagate_acl,
        "sendEmail": email_data is not None,
        "includeAnonymousLinkInEmail": not require_signin,
        "useSimplifiedRoles": True,
    }
    if email_data is not None:
        body["emailSubject"] = email_data.get("subject", "")
        body["emailBody"] = email_data.get("body", "")
    return await q.get_parent(Queryable, root, "SP.Web.ShareObject").post(body=body)


async def check_permissions(q: Queryable, recipients: List[Dict[str, Any]]) -> Any:
    return await q.branch(Queryable, "checkPermissions", True).post(body={"recipients": recipients})


async def get_sharing_information(q: Queryable, request: Optional[Dict[str, Any]] = None) -> Any:
    return await q.branch(Queryable, "getSharingInformation", True).post(body={"request": request})


async def get_object_sharing_settings(q: Queryable, use_simplified_roles: bool = True) -> Any:
    return await q.branch(Queryable, "getObjectSharingSettings", True).post(
        body={"useSimplifiedRoles": use_simplified_roles})


async def unshare_object(q: Queryable) -> Any:
    return await q.branch(Queryable, "unshareObject", True).post()


async def delete_link_by_kind(q: Queryable, kind: SharingLinkKind) -> None:
    await q.branch(Queryable, "deleteLinkByKind", True).post(body={"linkKind": int(kind)})


async def unshare_link(q: Queryable, kind: SharingLinkKind, share_id: str = EMPTY_GUID) -> None:
    await q.branch(Queryable, "unshareLink", True).post(body={"linkKind": int(kind), "shareId": share_id})


class Shareable:
    """Sharing operations for locators addressing an item or a file."""

    async def get_share_link(self, kind=SharingLinkKind.ORGANIZATION_VIEW, expiration=None):
        return await get_share_link(self, kind, expiration)

    async def share_with(self, login_names, role=SharingRole.VIEW, require_signin=True,
                         propagate_acl=False, email_data=None):
        return await share_with(self, login_names, role, require_signin, propagate_acl, email_data)

    async def check_sharing_permissions(self, recipients):
        return await check_permissions(self, recipients)

    async def get_sharing_information(self, request=None):
        return await get_sharing_information(self, request)

    async def get_object_sharing_settings(self, use_simplified_roles=True):
        return await get_object_sharing_settings(self, use_simplified_roles)

    async def unshare(self):
        return await unshare_object(self)

    async def delete_sharing_link_by_kind(self, kind):
        return await delete_link_by_kind(self, kind)

    async def unshare_link(self, kind, share_id=EMPTY_GUID):
        return await unshare_link(self, kind, share_id)


class ShareableFolder:
    """Sharing operations for folders, applied to the folder's list item."""

    async def _shareable(self) -> QueryableInstance:
        result = await self.branch(QueryableInstance, "listItemAllFields", True).get(
            ODataEntityParser(QueryableInstance))
        return result.entity

    async def get_share_link(self, kind=SharingLinkKind.ORGANIZATION_VIEW, expiration=None):
        return await get_share_link(await self._shareable(), kind, expiration)

    async def share_with(self, login_names, role=SharingRole.VIEW, propagate_acl=False, email_data=None):
        return await share_with(await self._shareable(), login_names, role, True, propagate_acl, email_data)

    async def check_sharing_permissions(self, recipients):
        return await check_permissions(await self._shareable(), recipients)

    async def get_sharing_information(self, request=None):
        return await get_sharing_information(await self._shareable(), request)

    async def get_object_sharing_settings(self, use_simplified_roles=True):
        return await get_object_sharing_settings(await self._shareable(), use_simplified_roles)

    async def unshare(self):
        return await unshare_object(await self._shareable())

    async def delete_sharing_link_by_kind(self, kind):
        return await delete_link_by_kind(await self._shareable(), kind)

    async def unshare_link(self, kind, share_id=EMPTY_GUID):
        return await unshare_link(await self._shareable(), kind, share_id)


__all__ = [
    "Shareable",
    "ShareableFolder",
    "get_share_link",
    "share_with",
    "check_permissions",
    "get_sharing_information",
    "get_object_sharing_settings",
    "unshare_object",
    "delete_link_by_kind",
    "unshare_link",
]
