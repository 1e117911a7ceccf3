from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.code_editor import CodeEditor
from services.gemini.errors import MissingCredentialError
from services.gemini.prompts import EXPLAIN_INSTRUCTION, FIX_INSTRUCTION, infer_language

ORIGINAL = "def add(a, b):\n    return a - b\n"


@pytest.fixture()
def editor(fake_genai) -> CodeEditor:
    return CodeEditor(GeminiClientProvider(api_key="test-key", client=fake_genai))


def test_edit_code_strips_markdown_fences(editor, fake_genai):
    fake_genai.models.content_response = SimpleNamespace(
        text="```python\ndef add(a, b):\n    return a + b\n```"
    )

    result = asyncio.run(editor.edit_code(ORIGINAL, "fix the operator", "math_utils.py"))

    assert result == "def add(a, b):\n    return a + b"


def test_edit_code_prompt_embeds_file_context(editor, fake_genai):
    fake_genai.models.content_response = SimpleNamespace(text="x = 1")

    asyncio.run(editor.edit_code(ORIGINAL, "rename things", "src/app.tsx"))

    name, kwargs = fake_genai.models.calls[0]
    assert name == "generate_content"
    prompt = kwargs["contents"][0]
    assert "Filename: src/app.tsx" in prompt
    assert "Language: tsx" in prompt
    assert ORIGINAL in prompt
    assert "Instruction: rename things" in prompt
    assert kwargs["config"].temperature == 0.2


@pytest.mark.parametrize(
    "reply",
    [
        "```js\nconst a = 1;\n```",
        "```JavaScript\nconst a = 1;```",
        "Here:\n```\nconst a = 1;\n```\nand ```more```",
        "const a = 1;",
    ],
)
def test_edit_code_never_returns_fence_markers(editor, fake_genai, reply):
    fake_genai.models.content_response = SimpleNamespace(text=reply)

    result = asyncio.run(editor.edit_code("let a;", "make it const", "a.js"))

    assert "```" not in result
    assert result


@pytest.mark.parametrize("reply", [None, "", "```\n```", "   "])
def test_edit_code_returns_original_on_empty_reply(editor, fake_genai, reply):
    fake_genai.models.content_response = SimpleNamespace(text=reply)

    assert asyncio.run(editor.edit_code(ORIGINAL, "do something", "m.py")) == ORIGINAL


def test_edit_code_returns_original_when_provider_fails(editor, fake_genai):
    fake_genai.models.content_response = RuntimeError("503 from provider")

    assert asyncio.run(editor.edit_code(ORIGINAL, "do something", "m.py")) == ORIGINAL


def test_edit_code_still_raises_missing_credential(fake_genai, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    editor = CodeEditor(GeminiClientProvider(client=fake_genai))

    with pytest.raises(MissingCredentialError):
        asyncio.run(editor.edit_code(ORIGINAL, "do something", "m.py"))
    assert fake_genai.models.calls == []


def test_explain_and_fix_use_fixed_instructions(editor, fake_genai):
    fake_genai.models.content_response = SimpleNamespace(text="ok")

    asyncio.run(editor.explain_code(ORIGINAL, "m.py"))
    asyncio.run(editor.fix_bugs(ORIGINAL, "m.py"))

    prompts = [kwargs["contents"][0] for _, kwargs in fake_genai.models.calls]
    assert f"Instruction: {EXPLAIN_INSTRUCTION}" in prompts[0]
    assert f"Instruction: {FIX_INSTRUCTION}" in prompts[1]


def test_infer_language_uses_last_extension():
    assert infer_language("archive.tar.gz") == "gz"
    assert infer_language("main.py") == "py"
    assert infer_language("Makefile") == "Makefile"
