import asyncio
import json

import pytest

from prompt_builder import config, core, llm, prompts
from prompt_builder.models import ChatMessage, ExtractRequest, PlatformType

EXTRACTION_JSON = json.dumps(
    {
        "fields": {
            "featureName": {"value": "Daily", "confidence": 0.9, "evidence": "Daily"},
            "journeys": [{"name": {"value": "Write Entry", "confidence": 0.8, "evidence": "write"}}],
        },
        "missing": [],
        "followUpQuestions": ["Who is it for?"],
        "assistantMessage": "Got it.",
    }
)

PRD = """\
# Product Requirements Document: Daily

## Overview
A journaling app for busy people.
Entries take under a minute.

## Problem Statement
Journaling feels like homework.
"""


class TestExtractFields:
    def test_parses_result(self, make_generator):
        generator = make_generator(EXTRACTION_JSON)
        result = asyncio.run(llm.extract_fields(ExtractRequest(brain_dump="an app called Daily"), generator))
        assert result.fields.feature_name.value == "Daily"
        assert result.follow_up_questions == ["Who is it for?"]
        assert generator.calls[0]["json_mode"] is True
        assert generator.calls[0]["temperature"] == llm.EXTRACTION_TEMPERATURE
        assert generator.calls[0]["max_tokens"] == llm.EXTRACTION_MAX_TOKENS

    def test_invalid_json(self, make_generator):
        with pytest.raises(llm.LLMError, match="Failed to parse extraction result"):
            asyncio.run(llm.extract_fields(ExtractRequest(brain_dump="x"), make_generator("not json")))

    def test_unexpected_shape(self, make_generator):
        bad = json.dumps({"fields": {"featureName": {"confidence": 7}}})
        with pytest.raises(llm.LLMError, match="unexpected shape"):
            asyncio.run(llm.extract_fields(ExtractRequest(brain_dump="x"), make_generator(bad)))

    def test_requires_input(self):
        with pytest.raises(ValueError, match="Brain dump text or follow-up answer is required"):
            ExtractRequest(brain_dump="  ")


class TestExtractionMessages:
    def test_history_precedes_new_message(self):
        history = [ChatMessage(role="user", content="first"), ChatMessage(role="assistant", content="reply")]
        messages = prompts.build_extraction_messages("dump", "answer", {"featureName": "Daily"}, history)
        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        last = messages[-1]["content"]
        assert last.startswith('BRAIN DUMP TEXT:\n"""\ndump\n"""')
        assert 'FOLLOW-UP ANSWER:\n"""\nanswer\n"""' in last
        assert '"featureName": "Daily"' in last

    def test_follow_up_only(self):
        messages = prompts.build_extraction_messages("", "answer", None, [])
        assert messages[-1]["content"].startswith("FOLLOW-UP ANSWER:")


class TestGeneratePrd:
    def test_summary_from_overview(self, make_generator, product_data):
        generator = make_generator(PRD)
        result = asyncio.run(llm.generate_prd(product_data, generator))
        assert generator.calls[0]["max_tokens"] == llm.PRD_MAX_TOKENS
        assert result.prd_content == PRD
        assert result.prd_summary == "A journaling app for busy people.\nEntries take under a minute."

    def test_no_overview(self):
        assert llm.prd_summary("# Title\nNo overview here") == ""

    def test_user_prompt_marks_missing_fields(self, empty_data):
        prompt = prompts.build_prd_prompt(empty_data)
        assert "FEATURE NAME: [Not specified]" in prompt
        assert "[No journeys defined]" in prompt
        assert "SUPPORTING SCREENS:\n[None specified]" in prompt


class TestRefine:
    @pytest.mark.parametrize("platform", list(PlatformType))
    def test_system_prompt_names_tool(self, platform):
        system = prompts.refine_system_prompt(platform)
        assert prompts.PLATFORM_TOOL_NAMES[platform] in system
        assert system.endswith("Return ONLY the rewritten prompt in markdown.")

    def test_short_result_not_split(self, make_generator):
        response = asyncio.run(core.refine_and_split("prompt", PlatformType.FIGMA_MAKE, make_generator("better")))
        assert response.enhanced == "better"
        assert not response.split.over_limit
        assert len(response.split.parts) == 1

    def test_oversized_result_is_split(self, make_generator, sectioned_document):
        generator = make_generator(sectioned_document)
        response = asyncio.run(core.refine_and_split("prompt", PlatformType.FIGMA_MAKE, generator))
        assert response.split.over_limit
        assert response.split.usage_percent == 250
        assert len(response.split.parts) >= 3
        assert generator.calls[0]["temperature"] == llm.REFINE_TEMPERATURE
        assert generator.calls[0]["max_tokens"] == llm.REFINE_MAX_TOKENS


class TestGenerator:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(llm.LLMNotConfiguredError):
            llm.OpenAITextGenerator(config.LLMConfig(_env_file=None))

    def test_reads_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        generator = llm.get_generator()
        assert generator.model == "gpt-4o-mini"
