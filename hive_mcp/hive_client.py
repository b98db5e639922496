# hive_mcp/hive_client.py
import asyncio
import socket
from typing import Any, Optional

import httpx
import structlog

from .errors import NetworkError, ProviderError, RequestTimeout, UnknownError
from .schema import SearchRequest, SearchResponse

log = structlog.get_logger(__name__)


def _connect_error_code(exc: BaseException) -> str:
    """ENOTFOUND for name-resolution failures, ECONNREFUSED otherwise."""
    seen = exc
    while seen is not None:
        if isinstance(seen, socket.gaierror):
            return "ENOTFOUND"
        seen = seen.__cause__ or seen.__context__
    text = str(exc).lower()
    if "name or service not known" in text or "nodename nor servname" in text or "getaddrinfo" in text:
        return "ENOTFOUND"
    return "ECONNREFUSED"


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class HiveSearchClient:
    """One POST to the Hive search endpoint per call. No retries."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.hiveintelligence.xyz",
        search_path: str = "/v1/search",
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.search_path = search_path
        self.timeout_s = timeout_s
        self.transport = transport

    @classmethod
    def from_config(cls, cfg, **kw) -> "HiveSearchClient":
        return cls(
            cfg.api_key,
            base_url=cfg.base_url,
            search_path=cfg.search_path,
            timeout_s=cfg.request_timeout_s,
            **kw,
        )

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict) -> httpx.Response:
        # the overall cutoff is enforced in search(); httpx itself never times out
        async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
            return await client.post(
                f"{self.base_url}{self.search_path}",
                headers=self._headers(),
                json=payload,
            )

    async def search(self, req: SearchRequest) -> SearchResponse:
        payload = req.to_payload()
        log.info("hive_request", mode=req.mode(), include_data_sources=req.include_data_sources)
        try:
            if self.timeout_s is None:
                resp = await self._post(payload)
            else:
                resp = await asyncio.wait_for(self._post(payload), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise RequestTimeout(self.timeout_s) from e
        except httpx.ConnectError as e:
            raise NetworkError(_connect_error_code(e), str(e)) from e
        except httpx.TimeoutException as e:
            if self.timeout_s is not None:
                raise RequestTimeout(self.timeout_s) from e
            raise UnknownError(str(e) or type(e).__name__) from e
        except httpx.HTTPError as e:
            raise UnknownError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise ProviderError(resp.status_code, resp.reason_phrase, _error_body(resp))

        try:
            data = resp.json()
        except ValueError as e:
            raise UnknownError(f"Invalid JSON in Hive API response: {e}") from e
        if not isinstance(data, dict):
            raise UnknownError("Unexpected Hive API response shape")

        log.info("hive_response", status=resp.status_code)
        return SearchResponse.from_payload(data)
