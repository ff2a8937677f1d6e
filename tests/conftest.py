import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from thetatools.api.client import ThetaApiClient, reset_client

BASE_URL = "https://api.test"


def run(coro):
    return asyncio.run(coro)


def envelope(body: Any) -> Dict[str, Any]:
    return {"status": "SUCCESS", "body": body}


def make_service(
    alias: str,
    *,
    state: str = "public",
    name: Optional[str] = None,
    instructions: Optional[str] = "Does things",
    input_vars: Optional[Dict[str, Any]] = None,
    variants: Optional[List[str]] = None,
    default_prediction: str = "predict",
) -> Dict[str, Any]:
    prediction: Dict[str, Any] = {
        "rank": 1,
        "func_type": "predict",
        "cost": 1,
        "cost_divisor": 1,
        "input_vars": input_vars or {},
        "output_vars": {},
    }
    if instructions is not None:
        prediction["instructions"] = instructions
    if variants is not None:
        prediction["variants"] = variants
    return {
        "id": f"srv_{alias}",
        "alias": alias,
        "name": name or alias.title(),
        "state": state,
        "predictions": {"predict": prediction},
        "default_prediction": default_prediction,
    }


class FakeApi:
    """Route table in front of httpx.MockTransport; records every request."""

    def __init__(self):
        self.routes: Dict[tuple, tuple] = {}
        self.calls: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200, text: Optional[str] = None):
        if text is not None:
            self.routes[(method, path)] = (status, {"text": text})
        else:
            self.routes[(method, path)] = (status, {"json": envelope(body) if status < 400 else body})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {request.url.path}"})
        status, kwargs = route
        return httpx.Response(status, **kwargs)

    def last_json(self) -> Any:
        return json.loads(self.calls[-1].content)

    def client(self) -> ThetaApiClient:
        return ThetaApiClient("test-key", base_url=BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture(autouse=True)
def _isolated_client(monkeypatch):
    monkeypatch.delenv("THETATOOLS_CONFIG_FILE", raising=False)
    reset_client()
    yield
    reset_client()
