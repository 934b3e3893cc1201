from typing import Any, Optional

from sprest.sprest_config import runtime_config
from sprest.sprest_errors import AddressConstructionError
from sprest.sprest_webs import Web


class SPRest:
    """
    Entry point: `SPRest("https://contoso.sharepoint.com/sites/dev").web`.

    Without a base url the configured `base-url` is used; without a
    transport every request goes through runtime_config.transport().
    """
    def __init__(self, base_url: Optional[str] = None, transport: Any = None):
        self.base_url = base_url or runtime_config.base_url
        if not self.base_url:
            raise AddressConstructionError("No base url given and no 'base-url' configured")
        self.transport = transport

    @property
    def web(self) -> Web:
        web = Web(self.base_url)
        if self.transport is not None:
            web.in_context(self.transport)
        return web
