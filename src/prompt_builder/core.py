import logging
import time

from prompt_builder import assembler, cursor_export, extraction, limits, llm, models, splitter

logger = logging.getLogger(__name__)


def assemble_prompt(request: models.AssembleRequest) -> models.AssembleResponse:
    prompt = assembler.assemble(request.data, request.mode)
    return models.AssembleResponse(
        prompt=prompt,
        completeness=assembler.completeness_score(request.data, request.mode),
        complete=assembler.is_prompt_complete(request.data, request.mode),
        char_count=len(prompt),
    )


def split_for_platform(text: str, platform: models.PlatformType) -> models.SplitResponse:
    limit = limits.limit_for(platform)
    parts = splitter.split_prompt(text, platform)
    if len(parts) > 1:
        logger.info(
            f"Split {limits.format_char_count(len(text))} chars for {platform.value} "
            f"(limit {limits.format_char_count(limit)}) into {len(parts)} parts"
        )
    return models.SplitResponse(
        platform=platform,
        limit=limit,
        char_count=len(text),
        usage_percent=limits.usage_percent(text, platform),
        over_limit=limits.is_over_limit(text, platform),
        parts=parts,
    )


def export_cursor(data: models.ProjectData) -> models.CursorExportResponse:
    return models.CursorExportResponse(
        filename=f"{cursor_export.safe_filename(data)}-cursor-prompt.md",
        content=cursor_export.generate_cursor_prompt(data),
    )


async def refine_and_split(
    prompt: str,
    platform: models.PlatformType,
    generator: llm.TextGenerator | None = None,
) -> models.RefineResponse:
    logger.info(f"Refining {len(prompt)}-char prompt for {platform.value}")
    t0 = time.monotonic()
    enhanced = await llm.refine_prompt(prompt, platform, generator)
    logger.info(f"Refinement completed in {time.monotonic() - t0:.1f}s: {len(enhanced)} chars")

    # The rewrite is free to ignore the budget, so it is measured again here
    if limits.is_over_limit(enhanced, platform):
        logger.info(f"Refined prompt is {limits.usage_percent(enhanced, platform)}% of the {platform.value} limit")

    return models.RefineResponse(
        original=prompt,
        enhanced=enhanced,
        split=split_for_platform(enhanced, platform),
    )


async def extract(
    request: models.ExtractRequest,
    generator: llm.TextGenerator | None = None,
) -> models.ExtractionResult:
    t0 = time.monotonic()
    result = await llm.extract_fields(request, generator)
    journeys = len(result.fields.journeys or [])
    logger.info(
        f"Extraction completed in {time.monotonic() - t0:.1f}s: "
        f"{journeys} journeys, {len(result.missing)} missing, {len(result.follow_up_questions)} questions"
    )
    return result


def apply_extraction(request: models.ApplyExtractionRequest) -> models.ApplyExtractionResponse:
    data = extraction.apply_extracted_fields(request.current, request.extracted, request.threshold)
    suggestions = extraction.suggested_fields(request.extracted, request.threshold)
    logger.info(f"Applied extraction at threshold {request.threshold}: {len(suggestions.model_dump(exclude_none=True))} suggestions left")
    return models.ApplyExtractionResponse(data=data, suggestions=suggestions)


async def generate_prd(
    data: models.ProjectData,
    generator: llm.TextGenerator | None = None,
) -> models.PrdResponse:
    t0 = time.monotonic()
    result = await llm.generate_prd(data, generator)
    logger.info(f"PRD generated in {time.monotonic() - t0:.1f}s: {len(result.prd_content)} chars")
    return result
