from typing import Any, Dict, Optional, Union

from sprest.sprest_odata import ActionResult, extract_identifier
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_types import typed


class UserCustomActions(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "usercustomactions"):
        super().__init__(base_url, path)

    def get_by_id(self, id: str) -> 'UserCustomAction':
        return self._item(UserCustomAction, id)

    async def add(self, properties: Dict[str, Any]) -> ActionResult:
        data = await self.branch(UserCustomActions, None, True).post(
            body=typed("SP.UserCustomAction", properties))
        return ActionResult(data, self.get_by_id(extract_identifier(data, "Id")))

    async def clear(self) -> None:
        """Delete every custom action in the collection."""
        await self.branch(UserCustomActions, "clear", True).post()


class UserCustomAction(QueryableInstance):
    entity_type_name = "SP.UserCustomAction"
