import httpx
import pytest

from thetatools.api.client import API_KEY_HEADER, ThetaApiClient, get_client, reset_client
from thetatools.core.errors import ApiError, MissingApiKeyError, NotFoundError

from conftest import make_service, run


def test_headers_and_envelope_unwrap(fake_api):
    fake_api.add("GET", "/service/list", {"services": [make_service("whisper")]})
    services = run(fake_api.client().list_services())
    assert [s.alias for s in services] == ["whisper"]
    req = fake_api.calls[0]
    assert req.headers[API_KEY_HEADER] == "test-key"
    assert req.headers["content-type"] == "application/json"
    assert req.content == b""


def test_list_services_keeps_internal(fake_api):
    fake_api.add("GET", "/service/list", {"services": [
        make_service("whisper"),
        make_service("secret-llm", state="internal"),
    ]})
    services = run(fake_api.client().list_services())
    assert {s.alias: s.state for s in services} == {"whisper": "public", "secret-llm": "internal"}


def test_get_service_first_match(fake_api):
    fake_api.add("GET", "/service/flux-1-schnell", {"services": [make_service("flux-1-schnell")]})
    svc = run(fake_api.client().get_service("flux-1-schnell"))
    assert svc.alias == "flux-1-schnell"
    assert svc.default().name == "predict"


def test_get_service_empty_is_not_found(fake_api):
    fake_api.add("GET", "/service/nope", {"services": []})
    with pytest.raises(NotFoundError) as ei:
        run(fake_api.client().get_service("nope"))
    assert ei.value.status == 404
    assert "nope" in str(ei.value)


def test_create_infer_request_shape(fake_api):
    fake_api.add("POST", "/infer_request/whisper", {"infer_requests": [{"id": "infr_1", "state": "pending"}]})
    req = run(fake_api.client().create_infer_request(
        "whisper", {"audio_filename": "a.wav"}, wait=0, prediction="transcribe", variant="large-v3",
    ))
    assert req.id == "infr_1"
    sent = fake_api.calls[0]
    assert sent.method == "POST"
    assert sent.url.params["wait"] == "0"
    assert sent.url.params["prediction"] == "transcribe"
    assert fake_api.last_json() == {"input": {"audio_filename": "a.wav"}, "variant": "large-v3"}


def test_create_infer_request_omits_unset_optionals(fake_api):
    fake_api.add("POST", "/infer_request/sdxl", {"infer_requests": [{"id": "infr_2", "state": "success"}]})
    run(fake_api.client().create_infer_request("sdxl", {"prompt": "cat"}))
    sent = fake_api.calls[0]
    assert "wait" not in sent.url.params
    assert "prediction" not in sent.url.params
    assert fake_api.last_json() == {"input": {"prompt": "cat"}}


def test_create_infer_request_empty_is_not_found(fake_api):
    fake_api.add("POST", "/infer_request/sdxl", {"infer_requests": []})
    with pytest.raises(NotFoundError):
        run(fake_api.client().create_infer_request("sdxl", {}))


def test_get_infer_request_parses_cost(fake_api):
    fake_api.add("GET", "/infer_request/infr_9", {"infer_requests": [{
        "id": "infr_9", "state": "success", "output": {"text": "hi"},
        "cost": {"input": 2, "output": 3}, "create_time": "t0", "update_time": "t1",
    }]})
    req = run(fake_api.client().get_infer_request("infr_9"))
    assert req.is_terminal
    assert req.cost.total == 5
    assert req.output == {"text": "hi"}


def test_presigned_urls(fake_api):
    fake_api.add("POST", "/infer_request/whisper/input_presigned_urls", {"urls": {
        "audio_filename": {"upload_url": "https://s3/put", "filename": "f123.wav"},
    }})
    urls = run(fake_api.client().get_presigned_urls("whisper", ["audio_filename"]))
    assert urls["audio_filename"].filename == "f123.wav"
    assert fake_api.last_json() == {"input_fields": ["audio_filename"]}


@pytest.mark.parametrize("body,expected", [
    ({"message": "bad key"}, "bad key"),
    ({"error": "quota exceeded"}, "quota exceeded"),
])
def test_error_message_from_json(fake_api, body, expected):
    fake_api.add("GET", "/service/list", body, status=401)
    with pytest.raises(ApiError) as ei:
        run(fake_api.client().list_services())
    assert ei.value.status == 401
    assert str(ei.value) == f"API Error (401): {expected}"


def test_error_message_raw_text(fake_api):
    fake_api.add("GET", "/service/list", status=502, text="Bad Gateway")
    with pytest.raises(ApiError) as ei:
        run(fake_api.client().list_services())
    assert str(ei.value) == "API Error (502): Bad Gateway"


def test_transport_failure_wrapped():
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ThetaApiClient("k", base_url="https://api.test", transport=httpx.MockTransport(boom))
    with pytest.raises(ApiError) as ei:
        run(client.list_services())
    assert ei.value.status is None
    assert "connection refused" in str(ei.value)


def test_get_client_is_lazy_singleton(monkeypatch):
    monkeypatch.setenv("THETA_API_KEY", "abc")
    monkeypatch.setenv("THETA_API_BASE_URL", "https://override.test/")
    c1 = get_client()
    assert get_client() is c1
    assert c1.base_url == "https://override.test"
    reset_client()
    assert get_client() is not c1


def test_get_client_requires_key(monkeypatch):
    monkeypatch.delenv("THETA_API_KEY", raising=False)
    with pytest.raises(MissingApiKeyError):
        get_client()
