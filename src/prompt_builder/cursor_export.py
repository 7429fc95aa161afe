import re

from prompt_builder.config import PLATFORM_DESCRIPTIONS
from prompt_builder.models import ProjectData

_NON_SLUG = re.compile(r"[^a-z0-9]+")

ACCESSIBILITY_REQUIREMENTS = (
    "All text must meet WCAG AA contrast requirements (4.5:1 for body, 3:1 for large text)",
    "Text must be legible on all backgrounds",
    "Button labels must be descriptive and clear",
    "Focus states must be visible and obvious",
    "Minimum text size: 14px for body, 16px recommended",
)


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def generate_cursor_prompt(data: ProjectData) -> str:
    lines = [
        "# App Implementation Request",
        "",
        "I want to build an app based on the following design specification. "
        "Please create a detailed implementation plan.",
        "",
        "## Project Overview",
        "",
        f"**App Name:** {data.feature_name or '[Feature Name]'}",
        f"**Platform:** {data.product_company or '[Product/Company]'}",
        "",
    ]

    prd = data.prd_summary.strip() or data.prd_content.strip()
    if prd:
        lines += ["## Product Requirements Document", "", prd, ""]

    lines += ["## Problem Statement", "", data.problem or "[Problem to solve]", ""]
    lines += ["## Target Users", "", data.target_users or "[Target user description]", ""]

    if _filled(data.design_principle):
        lines += ["## Design Principle", "", f"**North Star:** {data.design_principle}", ""]
    if _filled(data.critical_challenge):
        lines += ["## Critical Challenges to Address", "", data.critical_challenge, ""]

    lines += ["## Features to Implement (User Journeys)", ""]
    for number, journey in enumerate(data.journeys, start=1):
        if not (_filled(journey.name) or _filled(journey.when)):
            continue
        lines += [f"### Feature {number}: {journey.name or 'Unnamed Journey'}", ""]
        for label, value in (
            ("When", journey.when),
            ("Trigger", journey.trigger),
            ("Must Communicate", journey.must_communicate),
            ("CTAs", journey.ctas),
            ("Tone/UX", journey.tone),
            ("Supporting Elements", journey.supporting_elements),
        ):
            if _filled(value):
                lines.append(f"**{label}:** {value}")
        lines.append("")

    screens = [s for s in data.supporting_screens if _filled(s)]
    if screens:
        lines += ["## Additional Screens/Pages", ""]
        lines += [f"- {screen}" for screen in screens]
        lines.append("")

    lines += ["## Technical Requirements", ""]
    lines.append(f"- **Platform:** {PLATFORM_DESCRIPTIONS.get(data.platform, data.platform)}")
    if _filled(data.design_system):
        lines.append(f"- **Design System/UI Library:** {data.design_system}")
    if _filled(data.layout_constraints):
        lines.append(f"- **Layout Constraints:** {data.layout_constraints}")
    states = [s for s in data.states_needed if _filled(s)]
    if states:
        lines.append(f"- **UI States to Handle:** {', '.join(states)}")
    lines.append("")

    lines += ["## Accessibility Requirements", ""]
    lines += [f"- {item}" for item in ACCESSIBILITY_REQUIREMENTS]
    lines.append("")

    lines += [
        "---",
        "",
        "## Instructions for Cursor",
        "",
        "Please create a comprehensive implementation plan that includes:",
        "",
        "1. **Tech Stack Recommendation** - Suggest appropriate technologies based on the requirements",
        "2. **Project Structure** - Outline the folder structure and key files",
        "3. **Component Breakdown** - List all UI components needed",
        "4. **Data Model** - Define the data structures and state management approach",
        "5. **API/Backend Requirements** - If applicable, outline backend needs",
        "6. **Implementation Steps** - Break down into actionable tasks",
        "",
        "After reviewing the plan, I will confirm and you can begin implementation.",
    ]
    return "\n".join(lines)


def safe_filename(data: ProjectData) -> str:
    slug = _NON_SLUG.sub("-", data.feature_name.lower()).strip("-")[:50]
    return slug or "design-prompt"
