"""ReplyGenerator and GuidanceClient against a fake OpenAI client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from services.ai.guidance_client import GuidanceClient, fallback_guidance
from services.ai.reply_generator import ReplyGenerator
from services.ai.response_parser import parse_json_object, strip_code_fences


def completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
    )


def fake_openai(content):
    create = AsyncMock(return_value=completion(content))
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


@pytest.mark.asyncio
async def test_reply_generator_returns_trimmed_text():
    client, create = fake_openai("  Start with your passport.  ")
    generator = ReplyGenerator(client, model="test-model")

    reply = await generator.generate("How do I apply for a visa?")

    assert reply == "Start with your passport."
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"][0]["role"] == "system"
    assert kwargs["messages"][1] == {"role": "user", "content": "How do I apply for a visa?"}


@pytest.mark.asyncio
async def test_reply_generator_rejects_empty_model_output():
    client, _ = fake_openai("")
    with pytest.raises(ValueError):
        await ReplyGenerator(client).generate("Hello")


@pytest.mark.asyncio
async def test_reply_generator_rejects_empty_input():
    client, create = fake_openai("unused")
    with pytest.raises(ValueError):
        await ReplyGenerator(client).generate("   ")
    create.assert_not_awaited()


def test_reply_generator_requires_client():
    with pytest.raises(ValueError):
        ReplyGenerator(None)


@pytest.mark.asyncio
async def test_guidance_client_parses_json_object():
    client, _ = fake_openai('{"visaType": "F-1", "interviewTips": ["Be concise"]}')

    result = await GuidanceClient(client).request_json("visa prompt")

    assert result == {"visaType": "F-1", "interviewTips": ["Be concise"]}


@pytest.mark.asyncio
async def test_guidance_client_strips_markdown_fences():
    client, _ = fake_openai('```json\n{"strengthScore": 91}\n```')

    result = await GuidanceClient(client).request_json("profile prompt")

    assert result == {"strengthScore": 91}


@pytest.mark.asyncio
async def test_guidance_client_falls_back_on_prose():
    client, _ = fake_openai("Here are some thoughts about your profile.")

    result = await GuidanceClient(client).request_json("profile prompt")

    assert result == fallback_guidance("Here are some thoughts about your profile.")
    assert result["strengthScore"] == 75
    assert result["error"] == "AI response format issue"


@pytest.mark.asyncio
async def test_guidance_client_prefers_per_call_client():
    default_client, default_create = fake_openai("{}")
    call_client, call_create = fake_openai('{"ok": true}')

    result = await GuidanceClient(default_client).request_json("prompt", client=call_client)

    assert result == {"ok": True}
    default_create.assert_not_awaited()
    call_create.assert_awaited_once()


@pytest.mark.asyncio
async def test_guidance_client_without_client_raises():
    with pytest.raises(ValueError):
        await GuidanceClient().request_json("prompt")


def test_parse_json_object_rejects_arrays():
    assert parse_json_object("[1, 2]") is None
    assert strip_code_fences("```\n{}\n```") == "{}"
