"""Async HTTP client for the Theta EdgeCloud on-demand API.

Every response is an envelope ``{"body": ..., "status": ...}``; the client
unwraps ``body``. There is no retry or polling here: when ``wait`` is set
on an inference submission the remote side holds the response open.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import json
import time

import httpx

from ..core.config_loader import ClientConfig, DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, load_config
from ..core.errors import ApiError, NotFoundError
from ..core.logging import get_logger, summarize_for_log
from ..core.models import InferRequest, Service, UploadTarget
from ..tools.rendering import format_number

logger = get_logger("thetatools.api")

API_KEY_HEADER = "x-theta-api-key"


def _seg(value: str) -> str:
    return quote(str(value), safe="")


def _error_message(response: httpx.Response) -> str:
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return text
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or text)
    return text


def _obj(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _first(items: Any, what: str) -> Dict[str, Any]:
    if not isinstance(items, list) or not items:
        raise NotFoundError(f"{what} not found")
    return items[0]


class ThetaApiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json", API_KEY_HEADER: api_key},
            timeout=timeout_s,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> "ThetaApiClient":
        return cls(config.api_key, base_url=config.base_url, timeout_s=config.timeout_s, transport=transport)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self) -> "ThetaApiClient":
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        start = time.time()
        try:
            response = await self._http.request(
                method,
                path,
                content=json.dumps(body) if body is not None else None,
                params=params or None,
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(None, f"{type(e).__name__}: {e}") from e
        latency = (time.time() - start) * 1000.0
        logger.debug("%s %s -> %s (%.1fms)", method, path, response.status_code, latency)
        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(response.status_code, f"invalid JSON response: {e}") from e
        if isinstance(data, dict) and "body" in data:
            data = data["body"]
        logger.debug("%s %s body=%s", method, path, summarize_for_log(data))
        return data if data is not None else {}

    async def list_services(self) -> List[Service]:
        """List every service (public and internal) the API reports."""
        body = await self.request("GET", "/service/list")
        return [Service.from_dict(s) for s in (_obj(body).get("services") or []) if isinstance(s, dict)]

    async def get_service(self, id_or_alias: str) -> Service:
        body = await self.request("GET", f"/service/{_seg(id_or_alias)}")
        return Service.from_dict(_first(_obj(body).get("services"), f"Service '{id_or_alias}'"))

    async def create_infer_request(
        self,
        service_alias: str,
        input: Dict[str, Any],
        wait: Optional[float] = None,
        prediction: Optional[str] = None,
        variant: Optional[str] = None,
        webhook: Optional[str] = None,
    ) -> InferRequest:
        """Submit an inference job.

        ``wait`` and ``prediction`` travel as query parameters, the rest in
        the JSON body. Unset optionals are not sent.
        """
        params: Dict[str, Any] = {}
        if wait is not None:
            params["wait"] = format_number(wait)
        if prediction:
            params["prediction"] = prediction
        body: Dict[str, Any] = {"input": input}
        if variant:
            body["variant"] = variant
        if webhook:
            body["webhook"] = webhook
        data = await self.request("POST", f"/infer_request/{_seg(service_alias)}", body=body, params=params)
        return InferRequest.from_dict(_first(_obj(data).get("infer_requests"), f"Infer request for '{service_alias}'"))

    async def get_infer_request(self, request_id: str) -> InferRequest:
        data = await self.request("GET", f"/infer_request/{_seg(request_id)}")
        return InferRequest.from_dict(_first(_obj(data).get("infer_requests"), f"Infer request '{request_id}'"))

    async def get_presigned_urls(self, service_alias: str, input_fields: List[str]) -> Dict[str, UploadTarget]:
        data = await self.request(
            "POST",
            f"/infer_request/{_seg(service_alias)}/input_presigned_urls",
            body={"input_fields": list(input_fields)},
        )
        urls = _obj(data).get("urls")
        if not isinstance(urls, dict):
            return {}
        return {str(k): UploadTarget.from_dict(v) for k, v in urls.items() if isinstance(v, dict)}


_client: Optional[ThetaApiClient] = None


def get_client(config: Optional[ClientConfig] = None) -> ThetaApiClient:
    """Process-wide client, built from config/env on first use."""
    global _client
    if _client is None:
        cfg = config or load_config()
        _client = ThetaApiClient.from_config(cfg)
        logger.info("client ready base_url=%s", cfg.base_url)
    return _client


def reset_client():
    global _client
    _client = None


__all__ = ["ThetaApiClient", "get_client", "reset_client", "API_KEY_HEADER"]
