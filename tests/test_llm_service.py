"""Tests for the LLM service - reply parsing and failure fallbacks (no network)."""

import json
from types import SimpleNamespace

import pytest

import affirmly.services.llm_service as llm_module
from affirmly.config import settings
from affirmly.services.llm_service import llm_service, parse_json_reply


class FakeGeneration:
    """Stands in for dashscope.Generation; records calls and replays one reply."""

    def __init__(self, content="", status_code=200):
        self.content = content
        self.status_code = status_code
        self.calls = []

    def call(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(
            status_code=self.status_code,
            message="boom",
            output=SimpleNamespace(choices=[SimpleNamespace(message=message)]),
        )


@pytest.fixture
def fake_llm(monkeypatch):
    monkeypatch.setattr(settings, "DASHSCOPE_API_KEY", "test-key")

    def _install(content="", status_code=200):
        generation = FakeGeneration(content, status_code)
        monkeypatch.setattr(llm_module, "_get_generation", lambda: generation)
        return generation

    return _install


def test_parse_json_reply_plain():
    assert parse_json_reply('[{"content": "a"}]') == [{"content": "a"}]


def test_parse_json_reply_code_fence():
    text = '```json\n[{"content": "a"}]\n```'
    assert parse_json_reply(text) == [{"content": "a"}]


def test_parse_json_reply_with_chatter():
    text = 'Here you go:\n[{"content": "a"}]\nEnjoy!'
    assert parse_json_reply(text) == [{"content": "a"}]


def test_parse_json_reply_object():
    text = 'Sure: {"category": "health", "tags": ["body"]}'
    assert parse_json_reply(text, "{", "}") == {"category": "health", "tags": ["body"]}


def test_parse_json_reply_garbage():
    with pytest.raises(ValueError):
        parse_json_reply("no json here")


async def test_generate_parses_candidates(fake_llm):
    reply = json.dumps([
        {"content": "I welcome calm into every breath", "reasoning": "breathing", "tags": ["calm"]},
        {"content": "I rest without guilt", "reasoning": "rest"},
        {"reasoning": "missing content"},
    ])
    generation = fake_llm(reply)

    candidates = await llm_service.generate("health", ["rest", "calm"], count=3, tone="calming")

    assert [c.content for c in candidates] == [
        "I welcome calm into every breath",
        "I rest without guilt",
    ]
    assert all(c.category == "health" for c in candidates)
    assert candidates[0].tags == ["calm"]
    assert candidates[1].tags == ["rest", "calm"]  # falls back to the requested tags

    prompt = generation.calls[0]["messages"][1]["content"]
    assert "Generate 3" in prompt
    assert '"health"' in prompt
    assert "calming" in prompt


async def test_generate_respects_count(fake_llm):
    fake_llm(json.dumps([{"content": f"I am {i}"} for i in range(6)]))

    candidates = await llm_service.generate("mindset", [], count=2)

    assert len(candidates) == 2


async def test_generate_falls_back_on_bad_json(fake_llm):
    fake_llm("I'm sorry, I can't do that.")

    candidates = await llm_service.generate("gratitude", ["thanks"], count=5)

    assert len(candidates) == 1
    assert candidates[0].category == "gratitude"
    assert candidates[0].tags == ["thanks"]
    assert "gratitude" in candidates[0].content


async def test_generate_falls_back_on_api_error(fake_llm):
    fake_llm("[]", status_code=500)

    candidates = await llm_service.generate("personal-growth", [], count=5)

    assert len(candidates) == 1
    assert "personal growth" in candidates[0].content
    assert candidates[0].tags == ["general"]


async def test_generate_falls_back_on_empty_list(fake_llm):
    fake_llm("[]")

    candidates = await llm_service.generate("career", ["work"])

    assert len(candidates) == 1


async def test_generate_without_api_key(monkeypatch):
    monkeypatch.setattr(settings, "DASHSCOPE_API_KEY", "")

    def _boom():
        raise AssertionError("the API must not be called without a key")

    monkeypatch.setattr(llm_module, "_get_generation", _boom)

    candidates = await llm_service.generate("success", ["goals"])
    assert len(candidates) == 1


async def test_categorize(fake_llm):
    fake_llm('{"category": "health", "tags": ["body", "care"]}')

    result = await llm_service.categorize("My body deserves care")

    assert result.category == "health"
    assert result.tags == ["body", "care"]


async def test_categorize_unknown_category(fake_llm):
    fake_llm('{"category": "astrology", "tags": ["stars"]}')

    result = await llm_service.categorize("The stars align for me")

    assert result.category == "personal-growth"
    assert result.tags == ["stars"]


async def test_categorize_falls_back(fake_llm):
    fake_llm("not json")

    result = await llm_service.categorize("Anything")

    assert result.category == "personal-growth"
    assert result.tags == ["general"]
