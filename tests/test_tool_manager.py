import pytest

from thetatools.core.registry import ToolMeta, ToolRegistry
from thetatools.core.tool_manager import ToolManager
from thetatools.tools import default_registry

from conftest import run


def _manager(fake_api):
    client = fake_api.client()
    return ToolManager(default_registry(), client_factory=lambda: client)


def test_default_registry_tools():
    names = [m.name for m in default_registry().list()]
    assert names == ["list_services", "infer", "get_request_status", "get_upload_url"]
    infer_schema = default_registry().get("infer").input_schema
    assert infer_schema["required"] == ["service", "input"]
    assert infer_schema["properties"]["wait"]["maximum"] == 60


def test_duplicate_registration_rejected():
    registry = ToolRegistry()

    async def h(client):
        return ""

    registry.register(ToolMeta(name="t", description="", handler=h))
    with pytest.raises(ValueError):
        registry.register(ToolMeta(name="t", description="", handler=h))


def test_call_success(fake_api):
    fake_api.add("POST", "/infer_request/llama-3-1-8b", {"infer_requests": [
        {"id": "i1", "state": "success", "output": {"text": "hello"}},
    ]})
    result = run(_manager(fake_api).call("infer", {"service": "llama-3-1-8b", "input": {"prompt": "hi"}}))
    assert not result.is_error
    assert "Inference completed successfully!" in result.text


def test_unknown_tool(fake_api):
    result = run(_manager(fake_api).call("delete_everything", {}))
    assert result.is_error
    assert result.text == "Error: Unknown tool: delete_everything"


def test_missing_required_argument(fake_api):
    result = run(_manager(fake_api).call("get_upload_url", {"service": "whisper"}))
    assert result.is_error
    assert "input_field" in result.text
    assert fake_api.calls == []


def test_unknown_argument(fake_api):
    result = run(_manager(fake_api).call("get_request_status", {"request_id": "x", "bogus": 1}))
    assert result.is_error
    assert "bogus" in result.text


def test_api_error_becomes_error_result(fake_api):
    fake_api.add("GET", "/service/list", {"message": "invalid api key"}, status=401)
    result = run(_manager(fake_api).call("list_services", {}))
    assert result.is_error
    assert result.text == "Error: API Error (401): invalid api key"


def test_none_arguments_treated_as_absent(fake_api):
    fake_api.add("GET", "/service/list", {"services": []})
    result = run(_manager(fake_api).call("list_services", {"category": None}))
    assert result.text.startswith("Found 0 available services")


def test_missing_api_key_is_error_result(monkeypatch):
    monkeypatch.delenv("THETA_API_KEY", raising=False)
    manager = ToolManager(default_registry())
    result = run(manager.call("get_request_status", {"request_id": "x"}))
    assert result.is_error
    assert "THETA_API_KEY" in result.text


def test_metrics(fake_api):
    fake_api.add("GET", "/service/list", {"services": []})
    manager = _manager(fake_api)
    run(manager.call("list_services", {}))
    run(manager.call("list_services", {}))
    run(manager.call("get_request_status", {}))  # missing request_id
    m = manager.get_metrics("list_services")
    assert m["call_count"] == 2
    assert m["error_count"] == 0
    assert m["avg_latency_ms"] >= 0
    all_metrics = manager.get_metrics()
    assert all_metrics["get_request_status"]["error_count"] == 1
    assert all_metrics["__aggregate__"]["call_total"] == 3
    assert all_metrics["__aggregate__"]["error_total"] == 1
