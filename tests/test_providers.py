"""Tests for model providers with fake SDK clients."""

import base64
from io import BytesIO
from types import SimpleNamespace

import httpx
import openai
import pytest
from google.genai import errors
from PIL import Image

from product_lens.exceptions import AuthenticationError, ImageError, ProviderError, RateLimitError
from product_lens.providers import GeminiProvider, OpenAIProvider
from product_lens.providers.base import encode_image, load_image


def _png_bytes() -> bytes:
    with BytesIO() as buffer:
        Image.new("RGB", (8, 8), color="white").save(buffer, format="PNG")
        return buffer.getvalue()


class RecordingGeminiClient:
    def __init__(self, text='{"name": "Switch"}', error=None):
        self.calls = []
        text_value, error_value, calls = text, error, self.calls

        class Models:
            @staticmethod
            def generate_content(model, contents, config):
                calls.append({"model": model, "contents": contents, "config": config})
                if error_value is not None:
                    raise error_value
                return SimpleNamespace(text=text_value)

        self.models = Models()


def test_load_image_missing_file_raises(tmp_path):
    with pytest.raises(ImageError):
        load_image(tmp_path / "missing.jpg")


def test_load_image_invalid_bytes_raises():
    with pytest.raises(ImageError):
        load_image(b"not an image")


def test_encode_image_keeps_png_bytes():
    payload = _png_bytes()

    data, mime_type = encode_image(payload)

    assert data == payload
    assert mime_type == "image/png"


def test_encode_image_converts_unknown_format_to_png():
    with BytesIO() as buffer:
        Image.new("RGB", (8, 8)).save(buffer, format="BMP")
        payload = buffer.getvalue()

    data, mime_type = encode_image(payload)

    assert mime_type == "image/png"
    assert data.startswith(b"\x89PNG")


def test_gemini_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(AuthenticationError):
        GeminiProvider()


def test_gemini_sends_images_before_prompt():
    client = RecordingGeminiClient()
    provider = GeminiProvider(client=client)

    text = provider.generate_json("prompt", images=[_png_bytes(), _png_bytes()], temperature=0.2)

    assert text == '{"name": "Switch"}'
    call = client.calls[0]
    assert call["model"] == "gemini-2.0-flash"
    assert len(call["contents"]) == 3
    assert all(isinstance(item, Image.Image) for item in call["contents"][:2])
    assert call["contents"][-1] == "prompt"
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].temperature == 0.2


def test_gemini_passes_system_instruction():
    client = RecordingGeminiClient()
    provider = GeminiProvider(model="gemini-2.5-flash", client=client)

    provider.generate_json("prompt", system_instruction="JSON only")

    call = client.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert call["contents"] == ["prompt"]
    assert call["config"].system_instruction == "JSON only"


def test_gemini_maps_rate_limit():
    error = errors.ClientError(429, {"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}})
    provider = GeminiProvider(client=RecordingGeminiClient(error=error))

    with pytest.raises(RateLimitError):
        provider.generate_json("prompt")


def test_gemini_wraps_other_errors():
    provider = GeminiProvider(client=RecordingGeminiClient(error=ConnectionError("reset")))

    with pytest.raises(ProviderError):
        provider.generate_json("prompt")


def test_gemini_empty_reply_is_empty_text():
    provider = GeminiProvider(client=RecordingGeminiClient(text=None))

    assert provider.generate_json("prompt") == ""


def _openai_client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_openai_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(AuthenticationError):
        OpenAIProvider()


def test_openai_client_does_not_retry():
    provider = OpenAIProvider(api_key="test-key", timeout_sec=12)

    assert provider.client.max_retries == 0
    assert provider.client.timeout == 12


def test_openai_sends_inline_images():
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        return _completion('{"name": "Switch"}')

    payload = _png_bytes()
    provider = OpenAIProvider(client=_openai_client(create))

    text = provider.generate_json("prompt", images=[payload], temperature=0.2)

    assert text == '{"name": "Switch"}'
    assert captured["model"] == "gpt-4o-mini"
    assert captured["response_format"] == {"type": "json_object"}
    assert captured["temperature"] == 0.2
    (message,) = captured["messages"]
    assert message["role"] == "user"
    text_part, image_part = message["content"]
    assert text_part == {"type": "text", "text": "prompt"}
    expected_url = "data:image/png;base64," + base64.b64encode(payload).decode("ascii")
    assert image_part == {"type": "image_url", "image_url": {"url": expected_url}}


def test_openai_text_only_call_with_system_instruction():
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        return _completion(None)

    provider = OpenAIProvider(client=_openai_client(create))

    text = provider.generate_json("prompt", system_instruction="JSON only")

    assert text == ""
    assert "temperature" not in captured
    assert captured["messages"] == [
        {"role": "system", "content": "JSON only"},
        {"role": "user", "content": "prompt"},
    ]


def test_openai_maps_rate_limit():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(429, request=request)

    def create(**kwargs):
        raise openai.RateLimitError("slow down", response=response, body=None)

    provider = OpenAIProvider(client=_openai_client(create))

    with pytest.raises(RateLimitError):
        provider.generate_json("prompt")


def test_openai_wraps_other_errors():
    def create(**kwargs):
        raise TimeoutError("timed out")

    provider = OpenAIProvider(client=_openai_client(create))

    with pytest.raises(ProviderError):
        provider.generate_json("prompt")
