from typing import Optional, Union

from sprest.sprest_files import Files
from sprest.sprest_items import Item
from sprest.sprest_odata import ActionResult, ODataEntityParser, ODataValueParser
from sprest.sprest_path import function_segment
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_shareable import ShareableFolder


class Folders(QueryableCollection):
    """A collection of Folder objects."""

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "folders"):
        super().__init__(base_url, path)

    def get_by_name(self, name: str) -> 'Folder':
        return self._item(Folder, name)

    async def add(self, url: str) -> ActionResult:
        """
        Add a folder below this collection's folder.

        url: relative or absolute url of the new folder; the service treats
        urls starting with a slash as server relative.
        """
        data = await self.branch(Folders, function_segment("add", url), True).post()
        return ActionResult(data, self.get_by_name(url))


class Folder(ShareableFolder, QueryableInstance):
    entity_type_name = "SP.Folder"

    @property
    def content_type_order(self) -> QueryableCollection:
        return QueryableCollection(self, "contentTypeOrder")

    @property
    def files(self) -> Files:
        return Files(self)

    @property
    def folders(self) -> Folders:
        return Folders(self)

    @property
    def list_item_all_fields(self) -> QueryableCollection:
        return QueryableCollection(self, "listItemAllFields")

    @property
    def parent_folder(self) -> 'Folder':
        return Folder(self, "parentFolder")

    @property
    def properties(self) -> QueryableInstance:
        return QueryableInstance(self, "properties")

    @property
    def server_relative_url(self) -> Queryable:
        return Queryable(self, "serverRelativeUrl")

    @property
    def unique_content_type_order(self) -> QueryableCollection:
        return QueryableCollection(self, "uniqueContentTypeOrder")

    async def recycle(self) -> str:
        """Move the folder to the recycle bin; returns the recycle bin item id."""
        return await self.branch(Folder, "recycle", True).post(parser=ODataValueParser())

    async def get_item(self, *selects: str) -> ActionResult:
        """The list item behind this folder, addressed where the service says it lives."""
        q = self.list_item_all_fields.select(*selects)
        return await q.get(ODataEntityParser(Item))
