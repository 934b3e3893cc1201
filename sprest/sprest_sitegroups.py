from typing import Optional, Union

from sprest.sprest_queryable import Queryable, QueryableCollection, QueryableInstance


class SiteGroups(QueryableCollection):

    def __init__(self, base_url: Union[str, Queryable], path: Optional[str] = "sitegroups"):
        super().__init__(base_url, path)

    def get_by_id(self, id: int) -> 'SiteGroup':
        return self._item_by(SiteGroup, "getById", id)

    def get_by_name(self, name: str) -> 'SiteGroup':
        return self._item_by(SiteGroup, "getByName", name)


class SiteGroup(QueryableInstance):
    entity_type_name = "SP.Group"
