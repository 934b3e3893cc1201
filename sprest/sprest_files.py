from typing import Optional, Union

from sprest.sprest_odata import ODataValueParser
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_shareable import Shareable


class Files(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "files"):
        super().__init__(base_url, path)

    def get_by_name(self, name: str) -> 'File':
        return self._item(File, name)


class File(Shareable, QueryableInstance):
    entity_type_name = "SP.File"

    @property
    def list_item_all_fields(self) -> QueryableCollection:
        return QueryableCollection(self, "listItemAllFields")

    async def recycle(self) -> str:
        """Move the file to the recycle bin; returns the recycle bin item id."""
        return await self.branch(File, "recycle", True).post(parser=ODataValueParser())
