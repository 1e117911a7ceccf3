from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest

from conftest import content_response, inline_part, video_operation
from models.generation_models import (
    AnalysisTextResult,
    Capability,
    GenerationRequest,
    ImageDataUriResult,
    TextResult,
    VideoUriResult,
)
from services.gemini.errors import MissingCredentialError
from services.gemini.gemini_service import GeminiService

PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="
)


async def _no_sleep(_seconds: float) -> None:
    return None


def _service(fake_genai, api_key="test-key", handler=None) -> GeminiService:
    handler = handler or (lambda request: httpx.Response(200, content=b"video", headers={"content-type": "video/mp4"}))
    return GeminiService(
        api_key=api_key,
        client=fake_genai,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        video_options={"sleep": _no_sleep},
    )


def test_every_capability_fails_fast_without_credentials(fake_genai, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    downloads = []
    service = _service(fake_genai, api_key=None, handler=lambda request: downloads.append(request))

    calls = [
        lambda: service.edit_code("x = 1", "change", "a.py"),
        lambda: service.explain_code("x = 1", "a.py"),
        lambda: service.fix_bugs("x = 1", "a.py"),
        lambda: service.chat("hello"),
        lambda: service.generate_image("a red circle", "1:1", "1K"),
        lambda: service.generate_video("a bear"),
        lambda: service.analyze_image(PNG_DATA_URI, "describe"),
    ]
    for call in calls:
        with pytest.raises(MissingCredentialError):
            asyncio.run(call())
    with pytest.raises(MissingCredentialError):
        service.connect_live()

    assert service.configured is False
    assert fake_genai.network_calls == 0
    assert downloads == []


def test_api_key_is_read_from_environment(fake_genai, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    service = GeminiService(client=fake_genai)

    assert service.configured is True
    assert service.provider.api_key == "env-key"


def test_run_dispatches_edit_request(fake_genai):
    fake_genai.models.content_response = SimpleNamespace(text="```py\nx = 2\n```")
    request = GenerationRequest(prompt="bump", capability=Capability.EDIT, code="x = 1", filename="a.py")

    result = asyncio.run(_service(fake_genai).run(request))

    assert result == TextResult(text="x = 2")


def test_run_dispatches_image_request_with_defaults(fake_genai):
    fake_genai.models.content_response = content_response([inline_part("QUJD")])

    result = asyncio.run(_service(fake_genai).run(GenerationRequest(prompt="cat", capability=Capability.IMAGE)))

    assert result == ImageDataUriResult(data_uri="data:image/png;base64,QUJD")
    assert result.to_dict() == {"data_uri": "data:image/png;base64,QUJD", "kind": "image"}
    config = fake_genai.models.calls[0][1]["config"]
    assert (config.image_config.aspect_ratio, config.image_config.image_size) == ("1:1", "1K")


def test_run_dispatches_video_request(fake_genai):
    fake_genai.models.video_operation = video_operation(False)
    fake_genai.operations.script = [video_operation(True, "https://example.test/video.mp4")]
    service = _service(fake_genai)

    result = asyncio.run(service.run(GenerationRequest(prompt="bear", capability=Capability.VIDEO)))

    assert isinstance(result, VideoUriResult)
    media_id = result.uri.rsplit("/", 1)[-1]
    assert service.media_store.get(media_id).content == b"video"
    assert fake_genai.models.calls[0][1]["config"].aspect_ratio == "16:9"


def test_run_dispatches_analyze_request(fake_genai):
    fake_genai.models.content_response = SimpleNamespace(text="A pixel.", candidates=[])
    request = GenerationRequest(prompt="describe", capability=Capability.ANALYZE, image_data_uri=PNG_DATA_URI)

    result = asyncio.run(_service(fake_genai).run(request))

    assert result == AnalysisTextResult(text="A pixel.")


@pytest.mark.parametrize(
    "request_",
    [
        GenerationRequest(prompt="edit", capability=Capability.EDIT, filename="a.py"),
        GenerationRequest(prompt="analyze", capability=Capability.ANALYZE),
    ],
)
def test_run_rejects_incomplete_requests(fake_genai, request_):
    with pytest.raises(ValueError):
        asyncio.run(_service(fake_genai).run(request_))


def test_generation_request_is_immutable():
    request = GenerationRequest(prompt="x", capability=Capability.CHAT)

    with pytest.raises(AttributeError):
        request.prompt = "y"
