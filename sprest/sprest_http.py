import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import httpx

from sprest.sprest_errors import TransportError
from sprest.sprest_path import combine

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json;odata=verbose;charset=utf-8"


@dataclass
class RawResponse:
    """Undecoded reply from the transport; header keys are lower-cased."""
    status: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")


async def http_request(method: str, url: str, *, config: Optional[Dict] = None,
                       data: Optional[str] = None, auth: Any = None) -> RawResponse:
    """
    Core HTTP helper.

    Returns a RawResponse on 2xx and raises TransportError otherwise.
    Connection failures are retried only for GET, and only when the config
    asks for it (`retries`, default 0); a write is never sent twice.
    """
    cfg = dict(config or {})
    timeout = float(cfg.pop('timeout', 30.0))
    retries = int(cfg.pop('retries', 0)) if method.upper() == 'GET' else 0
    backoff = float(cfg.pop('backoff', 0.2))
    headers = dict(cfg.pop('headers', {}))

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, auth=auth) as client:
        for attempt in range(retries + 1):
            body = (data.encode('utf-8') if isinstance(data, str) else data) if data is not None else None
            if body is not None:
                headers = {**headers}
                if not any(k.lower() == "content-type" for k in headers):
                    headers["Content-Type"] = DEFAULT_CONTENT_TYPE
            logger.debug("%s %s", method.upper(), url)
            try:
                resp = await client.request(
                    method.upper(),
                    url,
                    headers=headers,
                    content=body,
                )
            except httpx.HTTPError as e:
                if attempt < retries:
                    await asyncio.sleep(backoff * (2 ** attempt))
                    continue
                raise TransportError(f"{method.upper()} {url} failed: {e}", url=url) from e
            # Lower-case header keys for consistent lookups
            headers_map = {str(k).lower(): v for k, v in resp.headers.items()}
            if 200 <= resp.status_code < 300:
                return RawResponse(int(resp.status_code), resp.content or b"", headers_map)
            preview = (resp.text or "")[:200]
            raise TransportError(f"HTTP {resp.status_code} for {url}: {preview}",
                                 status=int(resp.status_code), url=url)


class HttpTransport:
    """
    The owning context of a locator tree. Holds no connection state between
    requests: each send opens and closes its own client.
    """
    def __init__(self, base_url: Optional[str] = None, *, config: Optional[Dict] = None, auth: Any = None):
        cfg = dict(config or {})
        self.base_url = base_url
        self.headers: Dict[str, str] = dict(cfg.pop('headers', {}))
        self.config = cfg
        self.auth = auth

    def resolve(self, url: str) -> str:
        if self.base_url and "://" not in url.partition('?')[0]:
            return str(combine(self.base_url, url))
        return url

    async def send(self, method: str, url: str, *, headers: Optional[Dict[str, str]] = None,
                   body: Optional[str] = None) -> RawResponse:
        cfg = dict(self.config)
        cfg['headers'] = {**self.headers, **(headers or {})}
        return await http_request(method, self.resolve(url), config=cfg, data=body, auth=self.auth)

    def __repr__(self) -> str:
        return f"<HttpTransport base_url={self.base_url!r}>"


__all__ = ["RawResponse", "HttpTransport", "http_request"]
