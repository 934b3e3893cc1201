from typing import Optional, Union

from sprest.sprest_folders import Folder
from sprest.sprest_items import Items
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_roles import RoleAssignments
from sprest.sprest_usercustomactions import UserCustomActions
from sprest.sprest_views import View, Views


class Lists(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "lists"):
        super().__init__(base_url, path)

    def get_by_title(self, title: str) -> 'List':
        return self._item_by(List, "getByTitle", title)

    def get_by_id(self, id: str) -> 'List':
        return self._item_by(List, "getById", id)


class List(QueryableInstance):
    entity_type_name = "SP.List"

    @property
    def items(self) -> Items:
        return Items(self)

    @property
    def views(self) -> Views:
        return Views(self)

    @property
    def default_view(self) -> View:
        return View(self, "DefaultView")

    @property
    def root_folder(self) -> Folder:
        return Folder(self, "rootFolder")

    @property
    def role_assignments(self) -> RoleAssignments:
        return RoleAssignments(self)

    @property
    def user_custom_actions(self) -> UserCustomActions:
        return UserCustomActions(self)
