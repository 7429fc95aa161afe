import json
import logging
import re
from functools import lru_cache
from typing import Protocol

from openai import AsyncOpenAI
from pydantic import ValidationError

from prompt_builder import config, models, prompts

logger = logging.getLogger(__name__)

EXTRACTION_TEMPERATURE = 0.3
PRD_TEMPERATURE = 0.5
REFINE_TEMPERATURE = 0.7

EXTRACTION_MAX_TOKENS = 3000
PRD_MAX_TOKENS = 4000
REFINE_MAX_TOKENS = 2000

_PRD_OVERVIEW = re.compile(r"## Overview\n+([^\n]+(?:\n[^\n#]+)?)")


class LLMError(Exception):
    pass


class LLMNotConfiguredError(LLMError):
    pass


class TextGenerator(Protocol):
    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str: ...


@lru_cache
def _get_client(api_key: str, base_url: str) -> AsyncOpenAI:
    # Retries are disabled: every request is a single attempt
    return AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)


class OpenAITextGenerator:
    def __init__(self, cfg: config.LLMConfig):
        if not cfg.openai_api_key:
            raise LLMNotConfiguredError(
                "AI features are not configured. Please add OPENAI_API_KEY to your environment variables."
            )
        self.client = _get_client(cfg.openai_api_key, cfg.openai_base_url)
        self.model = cfg.model_name
        self.timeout = cfg.timeout

    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=self.timeout,
                **kwargs,
            )
        except Exception as exc:
            raise LLMError(f"LLM request failed: {exc}") from exc

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise LLMError("LLM returned empty response")
        return text


def get_generator() -> TextGenerator:
    return OpenAITextGenerator(config.get_config().llm)


async def extract_fields(
    request: models.ExtractRequest,
    generator: TextGenerator | None = None,
) -> models.ExtractionResult:
    generator = generator or get_generator()
    messages = prompts.build_extraction_messages(
        request.brain_dump,
        request.follow_up_answer,
        request.existing_data,
        request.conversation_history,
    )
    text = await generator.generate(
        messages, temperature=EXTRACTION_TEMPERATURE, max_tokens=EXTRACTION_MAX_TOKENS, json_mode=True
    )

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(f"Extraction returned invalid JSON ({len(text)} chars)")
        raise LLMError(f"Failed to parse extraction result: {exc}") from exc

    try:
        return models.ExtractionResult.model_validate(data)
    except ValidationError as exc:
        raise LLMError(f"Extraction result has unexpected shape: {exc.error_count()} errors") from exc


def prd_summary(prd_content: str) -> str:
    match = _PRD_OVERVIEW.search(prd_content)
    return match.group(1).strip() if match else ""


async def generate_prd(
    data: models.ProjectData,
    generator: TextGenerator | None = None,
) -> models.PrdResponse:
    generator = generator or get_generator()
    messages = [
        {"role": "system", "content": prompts.PRD_SYSTEM_PROMPT},
        {"role": "user", "content": prompts.build_prd_prompt(data)},
    ]
    prd_content = await generator.generate(messages, temperature=PRD_TEMPERATURE, max_tokens=PRD_MAX_TOKENS)
    return models.PrdResponse(prd_content=prd_content, prd_summary=prd_summary(prd_content))


async def refine_prompt(
    prompt: str,
    platform: models.PlatformType,
    generator: TextGenerator | None = None,
) -> str:
    generator = generator or get_generator()
    messages = [
        {"role": "system", "content": prompts.refine_system_prompt(platform)},
        {"role": "user", "content": prompts.build_refine_prompt(prompt, platform)},
    ]
    return await generator.generate(messages, temperature=REFINE_TEMPERATURE, max_tokens=REFINE_MAX_TOKENS)
