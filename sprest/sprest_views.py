from typing import Any, Dict, Optional, Union

from sprest.sprest_odata import ActionResult, ODataValueParser, extract_identifier
from sprest.sprest_path import function_segment
from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance
from sprest.sprest_types import typed


class Views(QueryableCollection):
    """The views of a list."""

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "views"):
        super().__init__(base_url, path)

    def get_by_id(self, id: str) -> 'View':
        """id: the view's GUID."""
        return self._item(View, id)

    def get_by_title(self, title: str) -> 'View':
        """title: case-sensitive view title."""
        return self._item_by(View, "getByTitle", title)

    async def add(self, title: str, personal_view: bool = False,
                  additional_settings: Optional[Dict[str, Any]] = None) -> ActionResult:
        """
        Add a view.

        additional_settings is merged into the creation body and may
        override the defaults. The new view is addressed by the Id the
        service returns.
        """
        body = typed("SP.View", {
            "PersonalView": personal_view,
            "Title": title,
            **(additional_settings or {}),
        })
        data = await self.branch(Views, None, True).post(body=body)
        return ActionResult(data, self.get_by_id(extract_identifier(data, "Id")))


class View(QueryableInstance):
    entity_type_name = "SP.View"

    @property
    def fields(self) -> 'ViewFields':
        return ViewFields(self)

    async def render_as_html(self) -> str:
        return await self.branch(Queryable, "renderashtml", True).get(ODataValueParser())


class ViewFields(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "viewfields"):
        super().__init__(base_url, path)

    async def get_schema_xml(self) -> str:
        """The XML schema describing the collection."""
        return await self.branch(Queryable, "schemaxml", True).get(ODataValueParser())

    async def add(self, field_title_or_internal_name: str) -> None:
        await self.branch(ViewFields, function_segment("addviewfield", field_title_or_internal_name), True).post()

    async def move(self, field_internal_name: str, index: int) -> None:
        """Move a field to the zero-based position `index`."""
        await self.branch(ViewFields, "moveviewfieldto", True).post(
            body={"field": field_internal_name, "index": index})

    async def remove_all(self) -> None:
        await self.branch(ViewFields, "removeallviewfields", True).post()

    async def remove(self, field_internal_name: str) -> None:
        await self.branch(ViewFields, function_segment("removeviewfield", field_internal_name), True).post()
