from typing import Any, Dict, Optional, Union

from sprest.sprest_odata import ActionResult, extract_identifier
from sprest.sprest_path import function_segment
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_sitegroups import SiteGroups
from sprest.sprest_types import BasePermissions, typed


class RoleAssignments(QueryableCollection):
    """Role assignments of the current securable scope."""

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "roleassignments"):
        super().__init__(base_url, path)

    async def add(self, principal_id: int, role_def_id: int) -> None:
        """Assign the role definition `role_def_id` to the user or group `principal_id`."""
        segment = function_segment("addroleassignment", principalid=principal_id, roledefid=role_def_id)
        await self.branch(RoleAssignments, segment, True).post()

    async def remove(self, principal_id: int, role_def_id: int) -> None:
        segment = function_segment("removeroleassignment", principalid=principal_id, roledefid=role_def_id)
        await self.branch(RoleAssignments, segment, True).post()

    def get_by_id(self, id: int) -> 'RoleAssignment':
        return self._item(RoleAssignment, id)


class RoleAssignment(QueryableInstance):

    @property
    def groups(self) -> SiteGroups:
        return SiteGroups(self, "groups")

    @property
    def bindings(self) -> 'RoleDefinitionBindings':
        return RoleDefinitionBindings(self)


class RoleDefinitions(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "roledefinitions"):
        super().__init__(base_url, path)

    def get_by_id(self, id: int) -> 'RoleDefinition':
        return self._item_by(RoleDefinition, "getById", id)

    def get_by_name(self, name: str) -> 'RoleDefinition':
        return self._item_by(RoleDefinition, "getbyname", name)

    def get_by_type(self, role_type_kind: int) -> 'RoleDefinition':
        return self._item_by(RoleDefinition, "getbytype", role_type_kind)

    async def add(self, name: str, description: str, order: int,
                  base_permissions: BasePermissions) -> ActionResult:
        """
        Create a role definition.

        The new definition is addressed by the Id the service assigns.
        """
        body = typed("SP.RoleDefinition", {
            "BasePermissions": typed("SP.BasePermissions", dict(base_permissions)),
            "Description": description,
            "Name": name,
            "Order": order,
        })
        data = await self.branch(RoleDefinitions, None, True).post(body=body)
        return ActionResult(data, self.get_by_id(extract_identifier(data, "Id")))


class RoleDefinition(QueryableInstance):
    """A role definition; renaming it changes the address it is reachable by."""
    entity_type_name = "SP.RoleDefinition"
    addressing_key = "Name"

    async def update(self, properties: Dict[str, Any], entity_type: Optional[str] = None) -> ActionResult:
        if "BasePermissions" in properties:
            properties = {**properties,
                          "BasePermissions": typed("SP.BasePermissions", dict(properties["BasePermissions"]))}
        return await super().update(properties, entity_type)

    def _readdress(self, value: Any) -> 'RoleDefinition':
        return self.get_parent(RoleDefinitions, self.parent_url, "").get_by_name(value)


class RoleDefinitionBindings(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "roledefinitionbindings"):
        super().__init__(base_url, path)
