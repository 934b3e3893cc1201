import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from sprest.sprest_config import runtime_config
from sprest.sprest_http import RawResponse

SITE = "https://contoso.sharepoint.com/sites/dev"
API = SITE + "/_api/web"


@dataclass
class SentRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    @property
    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


def json_reply(payload: Any, status: int = 200) -> RawResponse:
    return RawResponse(status, json.dumps(payload).encode("utf-8"),
                       {"content-type": "application/json;odata=verbose;charset=utf-8"})


class RecordingTransport:
    """Records every send; answers from a queue (204/no content once it runs dry)."""

    def __init__(self):
        self.requests: List[SentRequest] = []
        self.replies: List[Any] = []

    def queue(self, *replies: Any) -> 'RecordingTransport':
        for r in replies:
            self.replies.append(r if isinstance(r, (RawResponse, Exception)) else json_reply(r))
        return self

    @property
    def last(self) -> SentRequest:
        return self.requests[-1]

    async def send(self, method, url, *, headers=None, body=None):
        self.requests.append(SentRequest(method, url, dict(headers or {}), body))
        reply = self.replies.pop(0) if self.replies else RawResponse(204)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    runtime_config.reset()
    yield
    runtime_config.reset()
