from thetatools.tools.upload_url import get_upload_url

from conftest import run

PATH = "/infer_request/whisper/input_presigned_urls"


def test_upload_url_report(fake_api):
    fake_api.add("POST", PATH, {"urls": {
        "audio_filename": {"upload_url": "https://bucket/put?sig=1", "filename": "abc123.wav"},
    }})
    text = run(get_upload_url(fake_api.client(), "whisper", "audio_filename"))
    assert text.startswith("**Upload URL Generated**\n\n")
    assert "`https://bucket/put?sig=1`" in text
    assert "`abc123.wav`" in text
    assert 'curl -X PUT -T your-file.wav "https://bucket/put?sig=1"' in text
    assert 'service="whisper"' in text
    assert '{"audio_filename": "abc123.wav"}' in text
    assert fake_api.last_json() == {"input_fields": ["audio_filename"]}


def test_missing_field_is_soft_failure(fake_api):
    fake_api.add("POST", PATH, {"urls": {}})
    text = run(get_upload_url(fake_api.client(), "whisper", "image"))
    assert text.startswith("Error: ")
    assert '"image"' in text
    assert "whisper" in text


def test_missing_urls_key_is_soft_failure(fake_api):
    fake_api.add("POST", PATH, {})
    text = run(get_upload_url(fake_api.client(), "whisper", "audio_filename"))
    assert "Could not get upload URL" in text
