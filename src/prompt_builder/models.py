from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Mode(str, Enum):
    IDEA = "idea"
    PRODUCT = "product"
    TEAM = "team"


class FeatureScope(str, Enum):
    NEW = "new"
    ENHANCEMENT = "enhancement"
    REDESIGN = "redesign"

    @property
    def label(self) -> str:
        return {
            FeatureScope.NEW: "New Feature",
            FeatureScope.ENHANCEMENT: "Enhancement",
            FeatureScope.REDESIGN: "Redesign",
        }[self]


class PlatformType(str, Enum):
    FIGMA_MAKE = "figma-make"
    LOVABLE = "lovable"
    CURSOR = "cursor"
    V0 = "v0"
    WINDSURF = "windsurf"


class SplitStrategy(str, Enum):
    SECTIONS = "sections"
    FEATURES = "features"
    PHASES = "phases"


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Journey(_Record):
    name: str = ""
    when: str = ""
    trigger: str = ""
    must_communicate: str = ""
    ctas: str = ""
    tone: str = ""
    supporting_elements: str = ""


class DesignSystemConfig(_Record):
    type: Literal["vibe", "system", "mcp", "llm-txt", "figma", "tokens"] = "vibe"
    tone_description: str = ""
    brand_feel: str = ""
    system_name: str = ""


class ProjectData(_Record):
    prd_content: str = ""
    prd_summary: str = ""

    feature_name: str = ""
    app_type: str = ""
    app_summary: str = ""
    product_company: str = ""
    problem: str = ""
    target_users: str = ""
    design_principle: str = ""
    critical_challenge: str = ""
    design_vibe: str = ""

    journeys: list[Journey] = Field(default_factory=list)
    supporting_screens: list[str] = Field(default_factory=list)

    platform: str = "web"
    design_system: str = ""
    design_system_config: DesignSystemConfig | None = None
    layout_constraints: str = ""
    states_needed: list[str] = Field(default_factory=list)

    stakeholders: str = ""
    existing_app_context: str = ""
    feature_scope: FeatureScope | None = None
    integration_points: str = ""


class PlatformLimit(_Record):
    display_name: str
    max_chars: int
    split_strategy: SplitStrategy


class PromptPart(_Record):
    part_number: int
    total_parts: int
    content: str
    char_count: int


# Extraction


class FieldExtraction(_Record):
    value: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    evidence: str = ""


class JourneyExtraction(_Record):
    name: FieldExtraction = Field(default_factory=FieldExtraction)
    when: FieldExtraction = Field(default_factory=FieldExtraction)
    trigger: FieldExtraction = Field(default_factory=FieldExtraction)
    must_communicate: FieldExtraction = Field(default_factory=FieldExtraction)
    ctas: FieldExtraction = Field(default_factory=FieldExtraction)
    tone: FieldExtraction = Field(default_factory=FieldExtraction)
    supporting_elements: FieldExtraction = Field(default_factory=FieldExtraction)


class ExtractedFields(_Record):
    feature_name: FieldExtraction | None = None
    app_type: FieldExtraction | None = None
    app_summary: FieldExtraction | None = None
    product_company: FieldExtraction | None = None
    problem: FieldExtraction | None = None
    target_users: FieldExtraction | None = None
    design_principle: FieldExtraction | None = None
    critical_challenge: FieldExtraction | None = None
    journeys: list[JourneyExtraction] | None = None
    supporting_screens: list[FieldExtraction] | None = None
    platform: FieldExtraction | None = None
    design_vibe: FieldExtraction | None = None
    design_system: FieldExtraction | None = None
    layout_constraints: FieldExtraction | None = None


class ChatMessage(_Record):
    role: Literal["user", "assistant"]
    content: str


class ExtractionResult(_Record):
    fields: ExtractedFields = Field(default_factory=ExtractedFields)
    missing: list[str] = Field(default_factory=list)
    follow_up_questions: list[str] = Field(default_factory=list)
    assistant_message: str = ""


# Request / response bodies


class AssembleRequest(_Record):
    data: ProjectData = Field(default_factory=ProjectData)
    mode: Mode = Mode.PRODUCT


class AssembleResponse(_Record):
    prompt: str
    completeness: int
    complete: bool
    char_count: int


class SplitRequest(_Record):
    text: str
    platform: PlatformType


class SplitResponse(_Record):
    platform: PlatformType
    limit: int
    char_count: int
    usage_percent: int
    over_limit: bool
    parts: list[PromptPart]


class RefineRequest(_Record):
    prompt: str = Field(min_length=1)
    platform: PlatformType = PlatformType.FIGMA_MAKE


class RefineResponse(_Record):
    original: str
    enhanced: str
    split: SplitResponse


class ExtractRequest(_Record):
    brain_dump: str = ""
    follow_up_answer: str = ""
    existing_data: dict | None = None
    conversation_history: list[ChatMessage] = Field(default_factory=list)

    @model_validator(mode="after")
    def _has_input(self) -> "ExtractRequest":
        if not self.brain_dump.strip() and not self.follow_up_answer.strip():
            raise ValueError("Brain dump text or follow-up answer is required")
        return self


class ApplyExtractionRequest(_Record):
    current: ProjectData = Field(default_factory=ProjectData)
    extracted: ExtractedFields
    threshold: float = Field(default=0.75, ge=0.0, le=1.0)


class ApplyExtractionResponse(_Record):
    data: ProjectData
    suggestions: ExtractedFields


class PrdRequest(_Record):
    prompt_data: ProjectData


class PrdResponse(_Record):
    prd_content: str
    prd_summary: str


class CursorExportResponse(_Record):
    filename: str
    content: str


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
