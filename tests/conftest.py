from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest


class FakeModels:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.content_response: Any = SimpleNamespace(text="", candidates=[])
        self.video_operation: Any = None

    async def generate_content(self, **kwargs):
        self.calls.append(("generate_content", kwargs))
        if isinstance(self.content_response, Exception):
            raise self.content_response
        return self.content_response

    async def generate_videos(self, **kwargs):
        self.calls.append(("generate_videos", kwargs))
        return self.video_operation


class FakeOperations:
    def __init__(self) -> None:
        self.script: list[Any] = []
        self.calls = 0

    async def get(self, operation):
        self.calls += 1
        return self.script.pop(0)


class FakeChat:
    def __init__(self, owner: "FakeChats") -> None:
        self.owner = owner

    async def send_message(self, message):
        self.owner.messages.append(message)
        return self.owner.response


class FakeChats:
    def __init__(self) -> None:
        self.created: list[dict[str, Any]] = []
        self.messages: list[str] = []
        self.response: Any = SimpleNamespace(text="", candidates=[])

    def create(self, **kwargs):
        self.created.append(kwargs)
        return FakeChat(self)


class FakeLiveConnection:
    """Stands in for both the connect context manager and the live session."""

    def __init__(self, messages=(), *, enter_error=None, end_error=None) -> None:
        self.messages = list(messages)
        self.enter_error = enter_error
        self.end_error = end_error
        self.sent: list[dict[str, Any]] = []
        self.entered = False
        self.exited = False
        self._served = False

    async def __aenter__(self):
        if self.enter_error is not None:
            raise self.enter_error
        self.entered = True
        return self

    async def __aexit__(self, *exc_info):
        self.exited = True

    async def send_realtime_input(self, **kwargs):
        self.sent.append(kwargs)

    async def receive(self):
        if not self._served:
            self._served = True
            for message in self.messages:
                yield message
            if self.end_error is not None:
                raise self.end_error
        await asyncio.Event().wait()


class FakeLive:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.connection = FakeLiveConnection()

    def connect(self, **kwargs):
        self.calls.append(kwargs)
        return self.connection


class FakeGenaiClient:
    def __init__(self) -> None:
        self.models = FakeModels()
        self.operations = FakeOperations()
        self.chats = FakeChats()
        self.live = FakeLive()
        self.aio = SimpleNamespace(
            models=self.models,
            operations=self.operations,
            chats=self.chats,
            live=self.live,
        )

    @property
    def network_calls(self) -> int:
        return (
            len(self.models.calls)
            + self.operations.calls
            + len(self.chats.created)
            + len(self.live.calls)
        )


def video_operation(done: bool, uri: str | None = None, error: Any = None):
    response = None
    if uri is not None:
        response = SimpleNamespace(generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))])
    return SimpleNamespace(done=done, error=error, response=response)


def inline_part(data, mime_type: str = "image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str):
    return SimpleNamespace(inline_data=None, text=text)


def content_response(parts, text: str | None = None, grounding_metadata=None):
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts), grounding_metadata=grounding_metadata)
    return SimpleNamespace(text=text, candidates=[candidate])


def live_message(parts=(), transcription: str | None = None):
    output_transcription = SimpleNamespace(text=transcription) if transcription else None
    return SimpleNamespace(
        server_content=SimpleNamespace(
            model_turn=SimpleNamespace(parts=list(parts)) if parts else None,
            output_transcription=output_transcription,
        )
    )


@pytest.fixture()
def fake_genai() -> FakeGenaiClient:
    return FakeGenaiClient()
