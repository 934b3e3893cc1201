from typing import Optional, Union

from sprest.sprest_odata import ODataValueParser
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_shareable import Shareable


class Items(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "items"):
        super().__init__(base_url, path)

    def get_by_id(self, id: int) -> 'Item':
        return self._item(Item, id)


class Item(Shareable, QueryableInstance):
    """
    A list item. Its server type name depends on the list
    (`SP.Data.<List>ListItem`), so update() needs it passed explicitly.
    """

    @property
    def field_values_as_text(self) -> QueryableInstance:
        return QueryableInstance(self, "FieldValuesAsText")

    @property
    def folder(self) -> 'Folder':
        from sprest.sprest_folders import Folder  # local import to avoid cycle
        return Folder(self, "folder")

    async def recycle(self) -> str:
        return await self.branch(Item, "recycle", True).post(parser=ODataValueParser())
