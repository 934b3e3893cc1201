import json
from datetime import datetime

import pytest

from sprest.sprest_errors import ProtocolShapeError
from sprest.sprest_shareable import get_share_link
from sprest.sprest_types import EMPTY_GUID, SharingLinkKind, SharingRole
from sprest.sprest_webs import Web

SITE = "https://contoso.sharepoint.com/sites/dev"
API = SITE + "/_api/web"
ITEM = API + "/lists/getByTitle('Docs')/items(3)"
DOCS = API + "/getFolderByServerRelativeUrl('/sites/dev/Documents')"
ITEM_URI = API + "/Lists(guid'5d3a')/Items(12)"


def item(transport):
    return Web(SITE).in_context(transport).lists.get_by_title("Docs").items.get_by_id(3)


def reports(transport):
    web = Web(SITE).in_context(transport)
    return web.get_folder_by_server_relative_url("/sites/dev/Documents").folders.get_by_name("Reports")


@pytest.mark.asyncio
async def test_share_with_sends_three_requests_in_order(transport):
    transport.queue(
        {"d": {"EncodedAbsUrl": "https://contoso.sharepoint.com/sites/dev/Docs/a.docx"}},
        {"d": {"Id": 1073741826}},
        {"d": {"ShareObject": {"StatusCode": 0}}},
    )
    out = await item(transport).share_with("i:0#.f|membership|ann@contoso.com")

    first, second, third = transport.requests
    assert (first.method, first.url) == ("GET", ITEM + "?$select=EncodedAbsUrl")
    assert (second.method, second.url) == ("GET", SITE + "/_api/web/roledefinitions/getbytype(2)?$select=Id")
    assert (third.method, third.url) == ("POST", SITE + "/_api/SP.Web.ShareObject")
    assert third.json == {
        "url": "https://contoso.sharepoint.com/sites/dev/Docs/a.docx",
        "peoplePickerInput": json.dumps([{"Key": "i:0#.f|membership|ann@contoso.com"}]),
        "roleValue": "role:1073741826",
        "groupId": 0,
        "propagateAcl": False,
        "sendEmail": False,
        "includeAnonymousLinkInEmail": False,
        "useSimplifiedRoles": True,
    }
    assert out == {"ShareObject": {"StatusCode": 0}}


@pytest.mark.asyncio
async def test_share_with_edit_role_and_email(transport):
    transport.queue({"d": {"EncodedAbsUrl": "u"}}, {"d": {"Id": 1073741827}})
    await item(transport).share_with(["a", "b"], SharingRole.EDIT, require_signin=False,
                                     email_data={"subject": "Hi", "body": "See this"})

    assert transport.requests[1].url == SITE + "/_api/web/roledefinitions/getbytype(3)?$select=Id"
    body = transport.last.json
    assert json.loads(body["peoplePickerInput"]) == [{"Key": "a"}, {"Key": "b"}]
    assert body["roleValue"] == "role:1073741827"
    assert body["includeAnonymousLinkInEmail"] is True
    assert body["sendEmail"] is True
    assert body["emailSubject"] == "Hi"
    assert body["emailBody"] == "See this"


@pytest.mark.asyncio
async def test_share_with_ignores_read_shaping_on_the_item(transport):
    transport.queue({"d": {"EncodedAbsUrl": "u"}}, {"d": {"Id": 1}})
    await item(transport).select("Title").share_with("a")
    assert transport.requests[0].url == ITEM + "?$select=EncodedAbsUrl"


@pytest.mark.asyncio
async def test_share_with_missing_role_id_is_a_shape_error(transport):
    transport.queue({"d": {"EncodedAbsUrl": "u"}}, {"d": {}})
    with pytest.raises(ProtocolShapeError):
        await item(transport).share_with("a")
    assert len(transport.requests) == 2


@pytest.mark.asyncio
async def test_share_link_body(transport):
    when = datetime(2026, 12, 31, 23, 59)
    await get_share_link(item(transport), SharingLinkKind.ANONYMOUS_VIEW, when)
    assert transport.last.url == ITEM + "/shareLink"
    assert transport.last.json == {
        "request": {
            "createLink": True,
            "emailData": None,
            "settings": {"expiration": "2026-12-31T23:59:00", "linkKind": 4},
        },
    }


@pytest.mark.asyncio
async def test_item_sharing_actions(transport):
    target = item(transport)
    await target.unshare_link(SharingLinkKind.ORGANIZATION_EDIT)
    assert transport.last.url == ITEM + "/unshareLink"
    assert transport.last.json == {"linkKind": 3, "shareId": EMPTY_GUID}

    await target.delete_sharing_link_by_kind(SharingLinkKind.DIRECT)
    assert transport.last.url == ITEM + "/deleteLinkByKind"
    assert transport.last.json == {"linkKind": 1}

    await target.unshare()
    assert transport.last.url == ITEM + "/unshareObject"

    await target.get_object_sharing_settings()
    assert transport.last.url == ITEM + "/getObjectSharingSettings"
    assert transport.last.json == {"useSimplifiedRoles": True}

    await target.check_sharing_permissions([{"Id": "x"}])
    assert transport.last.url == ITEM + "/checkPermissions"
    assert transport.last.json == {"recipients": [{"Id": "x"}]}


@pytest.mark.asyncio
async def test_folder_is_shared_through_its_list_item(transport):
    transport.queue({"d": {"__metadata": {"uri": ITEM_URI}, "Id": 12}})
    await reports(transport).get_share_link()

    lookup, share = transport.requests
    assert (lookup.method, lookup.url) == ("GET", DOCS + "/folders('Reports')/listItemAllFields")
    assert (share.method, share.url) == ("POST", ITEM_URI + "/shareLink")
    assert share.json["request"]["settings"]["linkKind"] == int(SharingLinkKind.ORGANIZATION_VIEW)


@pytest.mark.asyncio
async def test_folder_share_with_uses_item_address(transport):
    transport.queue(
        {"d": {"__metadata": {"uri": ITEM_URI}}},
        {"d": {"EncodedAbsUrl": "https://contoso.sharepoint.com/sites/dev/Documents/Reports"}},
        {"d": {"Id": 1073741826}},
    )
    await reports(transport).share_with("group")

    urls = [r.url for r in transport.requests]
    assert urls == [
        DOCS + "/folders('Reports')/listItemAllFields",
        ITEM_URI + "?$select=EncodedAbsUrl",
        SITE + "/_api/web/roledefinitions/getbytype(2)?$select=Id",
        SITE + "/_api/SP.Web.ShareObject",
    ]
    assert transport.last.json["includeAnonymousLinkInEmail"] is False
