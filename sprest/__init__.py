from sprest.sprest_config import runtime_config, setup, load_settings
from sprest.sprest_errors import (
    SPRestError,
    AddressConstructionError,
    TransportError,
    ProtocolShapeError,
    UnresolvedAddressError,
)
from sprest.sprest_path import ResourceAddress, combine, odata_literal, key_segment, function_segment
from sprest.sprest_http import HttpTransport, RawResponse
from sprest.sprest_odata import (
    ActionResult,
    resolve_self_address,
    extract_identifier,
    ODataDefaultParser,
    ODataRawParser,
    ODataValueParser,
    ODataEntityParser,
    ODataEntityArrayParser,
)
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_shareable import Shareable, ShareableFolder
from sprest.sprest_types import SharingLinkKind, SharingRole, RoleType, BasePermissions, EMPTY_GUID
from sprest.sprest_folders import Folders, Folder
from sprest.sprest_files import Files, File
from sprest.sprest_items import Items, Item
from sprest.sprest_lists import Lists, List
from sprest.sprest_views import Views, View, ViewFields
from sprest.sprest_roles import (
    RoleAssignments,
    RoleAssignment,
    RoleDefinitions,
    RoleDefinition,
    RoleDefinitionBindings,
)
from sprest.sprest_sitegroups import SiteGroups, SiteGroup
from sprest.sprest_usercustomactions import UserCustomActions, UserCustomAction
from sprest.sprest_webs import Web
from sprest.sprest_rest import SPRest
