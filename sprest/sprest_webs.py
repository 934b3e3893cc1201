from typing import Optional, Union

from sprest.sprest_folders import Folder, Folders
from sprest.sprest_lists import Lists
from sprest.sprest_path import function_segment
from sprest.sprest_queryable import Queryable, QueryableInstance
from sprest.sprest_roles import RoleAssignments, RoleDefinitions
from sprest.sprest_sitegroups import SiteGroups
from sprest.sprest_usercustomactions import UserCustomActions


class Web(QueryableInstance):
    """
    A site. Built from a site url, it addresses `<url>/_api/web`:

        Web("https://contoso.sharepoint.com/sites/dev").folders.get_by_name("Shared Documents")
    """
    entity_type_name = "SP.Web"

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "_api/web"):
        super().__init__(base_url, path)

    @property
    def folders(self) -> Folders:
        return Folders(self)

    @property
    def root_folder(self) -> Folder:
        return Folder(self, "rootFolder")

    @property
    def lists(self) -> Lists:
        return Lists(self)

    @property
    def role_definitions(self) -> RoleDefinitions:
        return RoleDefinitions(self)

    @property
    def role_assignments(self) -> RoleAssignments:
        return RoleAssignments(self)

    @property
    def site_groups(self) -> SiteGroups:
        return SiteGroups(self)

    @property
    def user_custom_actions(self) -> UserCustomActions:
        return UserCustomActions(self)

    def get_folder_by_server_relative_url(self, url: str) -> Folder:
        return Folder(self, function_segment("getFolderByServerRelativeUrl", url))
