"""Tests for parsing model replies and the Gemini wrapper."""

from types import SimpleNamespace

import pytest

from namescout.services.name_generator import (
    NameGenerator,
    NameGeneratorError,
    NameGeneratorUnavailable,
    parse_suggestions,
)


def test_parses_json_array_embedded_in_prose():
    text = 'Sure! Here you go:\n```json\n["Brightly", "Pathio", "Lumora"]\n```'

    assert parse_suggestions(text, "brightpath", 10) == ["Brightly", "Pathio", "Lumora"]


def test_truncates_to_count():
    assert parse_suggestions('["a1", "b2", "c3"]', "x", 2) == ["a1", "b2"]


def test_drops_non_string_entries():
    assert parse_suggestions('["Nova", 42, null, "  "]', "x", 10) == ["Nova"]


def test_falls_back_to_line_split():
    text = "1) not json\n\"Zentro\", 'Klyra'\n" + "x" * 40

    assert parse_suggestions(text, "x", 10) == ["1) not json", "Zentro", "Klyra"]


def test_empty_reply_falls_back_to_original_name():
    assert parse_suggestions("[]", "brightpath", 10) == ["brightpath"]
    assert parse_suggestions('{"names": []}', "brightpath", 10) == ["brightpath"]


class _FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.kwargs = None

    async def generate_content(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def _client(models):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


@pytest.mark.asyncio
async def test_generate_sends_prompt_and_parses_reply():
    models = _FakeModels(text='["Nova", "Orbit"]')
    generator = NameGenerator(api_key="k", model="gemini-test", client=_client(models))

    assert await generator.generate("acme", 5) == ["Nova", "Orbit"]
    assert models.kwargs["model"] == "gemini-test"
    assert '"acme"' in models.kwargs["contents"]
    assert "Generate 5 creative" in models.kwargs["contents"]


@pytest.mark.asyncio
async def test_generate_without_key_is_unavailable():
    with pytest.raises(NameGeneratorUnavailable):
        await NameGenerator(api_key="").generate("acme")


@pytest.mark.asyncio
async def test_generate_wraps_sdk_errors():
    generator = NameGenerator(api_key="k", client=_client(_FakeModels(error=RuntimeError("quota"))))

    with pytest.raises(NameGeneratorError, match="quota"):
        await generator.generate("acme")
