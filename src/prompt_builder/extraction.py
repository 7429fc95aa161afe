from prompt_builder.models import ExtractedFields, FieldExtraction, Journey, ProjectData

HIGH_CONFIDENCE = 0.75
MEDIUM_CONFIDENCE = 0.5
LOW_CONFIDENCE = 0.25

# Extracted fields that map one-to-one onto a ProjectData text field
SIMPLE_FIELDS = (
    "feature_name",
    "product_company",
    "problem",
    "target_users",
    "design_principle",
    "critical_challenge",
    "platform",
    "design_system",
    "layout_constraints",
)

JOURNEY_FIELDS = tuple(Journey.model_fields)


def _accepted(extraction: FieldExtraction | None, threshold: float) -> bool:
    return bool(extraction and extraction.confidence >= threshold and extraction.value.strip())


def confidence_level(confidence: float) -> str:
    if confidence >= HIGH_CONFIDENCE:
        return "high"
    if confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def apply_extracted_fields(
    current: ProjectData,
    extracted: ExtractedFields,
    threshold: float = HIGH_CONFIDENCE,
) -> ProjectData:
    updates: dict = {}

    for name in SIMPLE_FIELDS:
        extraction = getattr(extracted, name)
        if _accepted(extraction, threshold):
            updates[name] = extraction.value

    if extracted.journeys:
        journeys = [
            Journey(
                **{
                    field: getattr(j, field).value if getattr(j, field).confidence >= threshold else ""
                    for field in JOURNEY_FIELDS
                }
            )
            for j in extracted.journeys
        ]
        # Keep the user's journeys unless at least one extracted journey is named
        if any(j.name.strip() for j in journeys):
            updates["journeys"] = journeys

    if extracted.supporting_screens:
        screens = [s.value for s in extracted.supporting_screens if _accepted(s, threshold)]
        if screens:
            updates["supporting_screens"] = screens

    return current.model_copy(update=updates)


def suggested_fields(extracted: ExtractedFields, threshold: float = HIGH_CONFIDENCE) -> ExtractedFields:
    # plausible but below the auto-apply threshold
    suggestions = {}
    for name in SIMPLE_FIELDS:
        extraction = getattr(extracted, name)
        if (
            extraction
            and LOW_CONFIDENCE <= extraction.confidence < threshold
            and extraction.value.strip()
        ):
            suggestions[name] = extraction
    return ExtractedFields(**suggestions)
