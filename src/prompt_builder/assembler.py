from collections.abc import Callable

from prompt_builder.config import DEFAULT_STATES
from prompt_builder.models import Journey, Mode, ProjectData

ACCESSIBILITY_CHECKLIST = (
    "All text meets WCAG AA contrast requirements (4.5:1 for body text, 3:1 for large text)",
    "Text is legible on all backgrounds",
    "Button labels are descriptive and clear",
    "Focus states are visible and obvious",
    "No text is too small (minimum 14px for body, 16px recommended)",
)

ACCESSIBILITY_BLOCK = "\n".join(
    [
        "**ACCESSIBILITY CHECK (CRITICAL):**",
        "After generating designs, verify:",
        *(f"- [ ] {item}" for item in ACCESSIBILITY_CHECKLIST),
        "- Use browser dev tools or contrast checker to validate all text/background combinations",
    ]
)

DIVIDER = ["---", ""]


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def _or(value: str | None, placeholder: str) -> str:
    return value if _filled(value) else placeholder


def _prd_text(data: ProjectData) -> str:
    return data.prd_summary.strip() or data.prd_content.strip()


def _prd_block(data: ProjectData) -> list[str]:
    prd = _prd_text(data)
    if not prd:
        return []
    return ["**PRODUCT CONTEXT (from PRD):**", "", prd, "", *DIVIDER]


def _screens(data: ProjectData) -> list[str]:
    return [s for s in data.supporting_screens if _filled(s)]


def _states(data: ProjectData) -> str:
    return ", ".join([s for s in data.states_needed if _filled(s)] or DEFAULT_STATES)


def _design_vibe(data: ProjectData) -> str:
    tone = data.design_system_config.tone_description if data.design_system_config else ""
    for candidate in (data.design_system, data.design_vibe, tone):
        if _filled(candidate):
            return candidate
    return ""


def _idea_prompt(data: ProjectData) -> str:
    lines: list[str] = []

    app_type = f" - {data.app_type}" if _filled(data.app_type) else ""
    lines.append(f"I'm building **{_or(data.feature_name, '[App Name]')}**{app_type}.")
    lines.append("")

    for label, value in (
        ("**What it is:**", data.app_summary),
        ("**Who it's for:**", data.target_users),
        ("**Key constraint:**", data.design_principle),
    ):
        if _filled(value):
            lines += [label, value, ""]

    lines += DIVIDER
    lines += ["**KEY USER FLOWS:**", ""]

    if any(_filled(j.name) for j in data.journeys):
        # Numbering follows the journey's position, unnamed journeys leave gaps
        for number, journey in enumerate(data.journeys, start=1):
            if not _filled(journey.name):
                continue
            lines.append(f"**Flow {number}: {journey.name}**")
            if _filled(journey.must_communicate):
                lines.append(f"- Key moment: {journey.must_communicate}")
            lines.append("")
    else:
        lines += ["**Flow 1: [What happens]**", "- Key moment: [What matters most]", ""]

    lines += DIVIDER

    vibe = _design_vibe(data)
    if vibe:
        lines += ["**Design Vibe:**", vibe]
        if data.design_system_config and _filled(data.design_system_config.brand_feel):
            lines.append(f"({data.design_system_config.brand_feel})")
        lines.append("")
        lines += DIVIDER

    if _filled(data.platform) and data.platform != "web":
        lines += [f"**Platform:** {data.platform}", ""]
        lines += DIVIDER

    lines.append(ACCESSIBILITY_BLOCK)
    return "\n".join(lines)


def _full_journey(journey: Journey, number: int) -> list[str]:
    name = _or(journey.name, f"[Journey {number} Name]")
    when = _or(journey.when, "[WHEN it happens]")
    return [
        f"**Journey {number}: {name} ({when})**",
        f"- {_or(journey.trigger, '[Trigger/entry point]')}",
        f"- Must communicate: {_or(journey.must_communicate, '[value props, timing, who, why]')}",
        f"- {_or(journey.ctas, '[Key CTAs: primary vs secondary]')}",
        f"- {_or(journey.tone, '[Tone/framing]')}",
        f"- {_or(journey.supporting_elements, '[Supporting elements: links, visuals, etc.]')}",
        "",
    ]


def _product_prompt(data: ProjectData) -> str:
    lines = _prd_block(data)

    feature = _or(data.feature_name, "[feature name]")
    company = _or(data.product_company, "[product/company]")
    lines += [f"I'm designing {feature} for {company}.", ""]

    lines += ["**Problem:**", _or(data.problem, "[2-3 sentences: What's the gap? What's the solution?]"), ""]
    lines += [
        "**Target Users:**",
        _or(data.target_users, "[Role + behavioral context: How often? What device? What mindset?]"),
        "",
    ]
    lines += ["**Key Design Principle:**", _or(data.design_principle, "[ONE North Star principle for tone/framing]"), ""]
    lines += ["**Critical Challenge:**", _or(data.critical_challenge, "[One key tension or edge case]"), ""]
    lines += DIVIDER

    lines += ["**CORE USER JOURNEYS TO DESIGN:**", ""]
    for number, journey in enumerate(data.journeys or [Journey(name="[Name]")], start=1):
        lines += _full_journey(journey, number)

    lines.append("**Supporting Screens:**")
    lines += [f"- {screen}" for screen in _screens(data)] or ["- [Brief list]"]
    lines.append("")
    lines += DIVIDER

    lines += [
        "**UI Requirements:**",
        f"- Platform: {_or(data.platform, '[web/mobile/desktop]')}",
        f"- Design system: {_or(data.design_system, '[Your design system]')}",
        f"- Layout: {_or(data.layout_constraints, '[Key constraints]')}",
        f"- States needed: {_states(data)}",
        "",
    ]
    lines += DIVIDER

    lines.append(ACCESSIBILITY_BLOCK)
    return "\n".join(lines)


def _team_prompt(data: ProjectData) -> str:
    lines = _prd_block(data)

    has_team_context = (
        _filled(data.existing_app_context) or data.feature_scope is not None or _filled(data.integration_points)
    )
    if has_team_context:
        lines.append("**EXISTING APP CONTEXT:**")
        if _filled(data.existing_app_context):
            lines.append(data.existing_app_context)
        if data.feature_scope is not None:
            lines.append(f"- Feature Scope: {data.feature_scope.label}")
        if _filled(data.integration_points):
            lines.append(f"- Integration Points: {data.integration_points}")
        lines.append("")

    if _filled(data.stakeholders):
        lines += ["**STAKEHOLDERS:**", data.stakeholders, ""]

    if has_team_context or _filled(data.stakeholders):
        lines += DIVIDER

    lines += ["**CORE USER JOURNEYS TO DESIGN:**", ""]
    if any(_filled(j.name) for j in data.journeys):
        for number, journey in enumerate(data.journeys, start=1):
            name = _or(journey.name, f"[Journey {number} Name]")
            when = _or(journey.when, "[WHEN it happens]")
            lines.append(f"**Journey {number}: {name} ({when})**")
            for label, value in (
                ("Trigger", journey.trigger),
                ("Must communicate", journey.must_communicate),
                ("CTAs", journey.ctas),
                ("Tone", journey.tone),
                ("Supporting elements", journey.supporting_elements),
            ):
                if _filled(value):
                    lines.append(f"- {label}: {value}")
            lines.append("")
    else:
        lines += ["**Journey 1: [Name] ([WHEN it happens])**", "- [Define the user journey details]", ""]

    screens = _screens(data)
    if screens:
        lines.append("**Supporting Screens:**")
        lines += [f"- {screen}" for screen in screens]
        lines.append("")

    lines += DIVIDER

    lines.append("**UI Requirements:**")
    lines.append(f"- Platform: {_or(data.platform, '[web/mobile/desktop]')}")
    if _filled(data.design_system):
        lines.append(f"- Design system: {data.design_system}")
    if _filled(data.layout_constraints):
        lines.append(f"- Layout: {data.layout_constraints}")
    lines.append(f"- States needed: {_states(data)}")
    lines.append("")
    lines += DIVIDER

    lines.append(ACCESSIBILITY_BLOCK)
    return "\n".join(lines)


TEMPLATES: dict[Mode, Callable[[ProjectData], str]] = {
    Mode.IDEA: _idea_prompt,
    Mode.PRODUCT: _product_prompt,
    Mode.TEAM: _team_prompt,
}


def assemble(data: ProjectData, mode: Mode = Mode.PRODUCT) -> str:
    return TEMPLATES[Mode(mode)](data)


# Completeness scoring

Rubric = list[tuple[int, Callable[[ProjectData], bool]]]


def _named_journey(data: ProjectData) -> bool:
    return any(_filled(j.name) for j in data.journeys)


def _scheduled_journey(data: ProjectData) -> bool:
    return any(_filled(j.name) and _filled(j.when) for j in data.journeys)


def _field(name: str) -> Callable[[ProjectData], bool]:
    return lambda data: _filled(getattr(data, name))


SCORE_RUBRICS: dict[Mode, Rubric] = {
    Mode.IDEA: [
        (20, _field("feature_name")),
        (10, _field("app_type")),
        (15, _field("app_summary")),
        (15, _field("target_users")),
        (10, _field("design_principle")),
        (20, _named_journey),
        (10, lambda data: bool(_design_vibe(data))),
    ],
    Mode.PRODUCT: [
        (10, _field("feature_name")),
        (10, _field("product_company")),
        (15, _field("problem")),
        (10, _field("target_users")),
        (10, _field("design_principle")),
        (10, _field("critical_challenge")),
        (20, _scheduled_journey),
        (5, lambda data: bool(_screens(data))),
        (5, _field("design_system")),
        (5, _field("layout_constraints")),
    ],
    Mode.TEAM: [
        (25, lambda data: bool(_prd_text(data))),
        (10, _field("existing_app_context")),
        (5, lambda data: data.feature_scope is not None),
        (10, _field("stakeholders")),
        (5, _field("integration_points")),
        (20, _scheduled_journey),
        (5, lambda data: bool(_screens(data))),
        (10, _field("design_system")),
        (5, _field("layout_constraints")),
        (5, _field("platform")),
    ],
}


def completeness_score(data: ProjectData, mode: Mode = Mode.PRODUCT) -> int:
    score = sum(weight for weight, present in SCORE_RUBRICS[Mode(mode)] if present(data))
    return max(0, min(100, score))


def is_prompt_complete(data: ProjectData, mode: Mode = Mode.PRODUCT) -> bool:
    mode = Mode(mode)
    if mode is Mode.IDEA:
        return _filled(data.feature_name) and _named_journey(data)
    if mode is Mode.TEAM:
        return bool(_prd_text(data)) and _named_journey(data)
    return (
        _filled(data.feature_name)
        and _filled(data.product_company)
        and _filled(data.problem)
        and _named_journey(data)
    )
