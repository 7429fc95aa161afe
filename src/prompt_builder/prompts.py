import json

from prompt_builder.models import ChatMessage, PlatformType, ProjectData

EXTRACTION_SYSTEM_PROMPT = """\
You are a product requirements extraction assistant for the "Explore an Idea" \
workflow. Your job is to help vibe coders (people building apps with AI \
assistance) turn rough ideas into structured design briefs.

EXTRACTION PHILOSOPHY:
1. Be GENERATIVE - infer reasonable defaults from context
2. Help the user move forward, not block them with missing fields
3. Always provide something useful for journeys, design vibe, and app summary
4. Only flag truly CRITICAL missing info that would block design work

Return a JSON object with this exact structure:
{
  "fields": {
    "featureName": { "value": "App Name", "confidence": 0.0-1.0, "evidence": "quoted text" },
    "appType": { "value": "App category (e.g. 'habit tracking app')", "confidence": 0.0-1.0, "evidence": "quoted text" },
    "appSummary": { "value": "2-3 sentence summary: what it does, who it's for, what makes it special", "confidence": 0.0-1.0, "evidence": "inferred" },
    "productCompany": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "problem": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "targetUsers": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "designPrinciple": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "criticalChallenge": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "platform": { "value": "web|mobile|desktop|responsive", "confidence": 0.0-1.0, "evidence": "quoted text or inferred" },
    "designVibe": { "value": "Aesthetic/feel description", "confidence": 0.0-1.0, "evidence": "quoted or inferred" },
    "designSystem": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "layoutConstraints": { "value": "string or empty", "confidence": 0.0-1.0, "evidence": "quoted text or empty" },
    "journeys": [
      {
        "name": { "value": "Journey name", "confidence": 0.0-1.0, "evidence": "text" },
        "when": { "value": "When this happens", "confidence": 0.0-1.0, "evidence": "text" },
        "trigger": { "value": "What triggers this", "confidence": 0.0-1.0, "evidence": "text" },
        "mustCommunicate": { "value": "Key info to show", "confidence": 0.0-1.0, "evidence": "text" },
        "ctas": { "value": "Primary actions", "confidence": 0.0-1.0, "evidence": "text" },
        "tone": { "value": "Emotional tone", "confidence": 0.0-1.0, "evidence": "text" },
        "supportingElements": { "value": "Supporting UI elements", "confidence": 0.0-1.0, "evidence": "text" }
      }
    ],
    "supportingScreens": [
      { "value": "string", "confidence": 0.0-1.0, "evidence": "quoted text" }
    ]
  },
  "missing": ["ONLY truly critical missing items"],
  "followUpQuestions": ["1-3 specific questions to improve the brief"],
  "assistantMessage": "A brief, helpful message summarizing what was extracted"
}

RULES:
1. JOURNEYS: always return AT LEAST 2. Flows described in the text get high \
confidence (0.8+); flows inferred from the app type (onboarding, core action, \
review, settings, search) get 0.6-0.7.
2. DESIGN VIBE: always provide one, inferred from users, problem space and \
any adjectives used.
3. APP SUMMARY: always provide one: what it is, who it's for, what makes it work.
4. MISSING: only list items that would block designing screens.
5. PLATFORM: infer from context, default to "responsive".

CONFIDENCE SCORING:
- 1.0: Explicitly stated
- 0.8-0.9: Clearly implied
- 0.6-0.7: Reasonably inferred
- 0.5: Educated guess
- Below 0.5: Don't include

Return ONLY valid JSON, no markdown, no explanation outside the JSON.\
"""

PRD_SYSTEM_PROMPT = """\
You are a senior product manager. Generate a professional Product \
Requirements Document (PRD) based on the provided project information.

Generate a well-structured markdown PRD with these sections:

# Product Requirements Document: [Feature Name]

## Overview
Brief 2-3 sentence summary of what this feature/product is.

## Problem Statement
## Goals
### Primary Goals
### Non-Goals (Out of Scope)
## Target Users
## User Journeys
For each journey: trigger, user goal, numbered steps, success criteria.
## Requirements
### Functional Requirements
### Non-Functional Requirements
Accessibility: WCAG AA compliance required.
## UI/UX Requirements
## Edge Cases & Error Handling
## Success Metrics
## Open Questions

RULES:
1. Use the provided information directly - do not invent features or \
requirements not implied by the input
2. If information is missing, add a placeholder like "[TBD - needs clarification]"
3. Keep the PRD concise but complete
4. Focus on WHAT, not HOW
5. Make it actionable for engineering and design teams\
"""

_REFINE_PREAMBLE = """\
You are an expert UX designer and prompt engineer. You rewrite design \
prompts so that {tool} produces the best possible result.

When rewriting:
1. Make descriptions more specific and actionable
2. Keep every requirement the user provided; never contradict it
3. Keep the tone consistent throughout
"""

REFINE_GOALS: dict[PlatformType, str] = {
    PlatformType.FIGMA_MAKE: (
        "4. Keep the same structure and markdown format\n"
        "5. Add the missing visual details (states, spacing, hierarchy) Figma Make needs to draw screens"
    ),
    PlatformType.LOVABLE: (
        "4. Turn the prompt into a full-stack build spec with one ## section per feature\n"
        "5. Name data entities and the pages that read and write them"
    ),
    PlatformType.CURSOR: (
        "4. Turn the prompt into implementation instructions grouped as ## Phase 1, ## Phase 2, ...\n"
        "5. Each phase must be independently buildable and testable"
    ),
    PlatformType.V0: (
        "4. Describe each screen as a React component tree with shadcn/ui and Tailwind\n"
        "5. Use one ## section per screen"
    ),
    PlatformType.WINDSURF: (
        "4. Turn the prompt into agent instructions grouped as ## Step 1, ## Step 2, ...\n"
        "5. State the acceptance check for every step"
    ),
}

PLATFORM_TOOL_NAMES: dict[PlatformType, str] = {
    PlatformType.FIGMA_MAKE: "Figma Make",
    PlatformType.LOVABLE: "Lovable",
    PlatformType.CURSOR: "Cursor",
    PlatformType.V0: "v0",
    PlatformType.WINDSURF: "Windsurf",
}


def refine_system_prompt(platform: PlatformType) -> str:
    platform = PlatformType(platform)
    return (
        _REFINE_PREAMBLE.format(tool=PLATFORM_TOOL_NAMES[platform])
        + REFINE_GOALS[platform]
        + "\n\nReturn ONLY the rewritten prompt in markdown."
    )


def build_refine_prompt(prompt: str, platform: PlatformType) -> str:
    tool = PLATFORM_TOOL_NAMES[PlatformType(platform)]
    return f"Please enhance this prompt for {tool} to be more specific, complete, and effective:\n\n{prompt}"


def build_extraction_messages(
    brain_dump: str,
    follow_up_answer: str,
    existing_data: dict | None,
    history: list[ChatMessage],
) -> list[dict[str, str]]:
    user_message = ""
    if brain_dump:
        user_message = f'BRAIN DUMP TEXT:\n"""\n{brain_dump}\n"""'
    if follow_up_answer:
        user_message += f'\n\nFOLLOW-UP ANSWER:\n"""\n{follow_up_answer}\n"""'
    if existing_data:
        user_message += (
            "\n\nEXISTING EXTRACTED DATA (for context, update if new info contradicts or adds to this):\n"
            + json.dumps(existing_data, indent=2)
        )

    messages = [{"role": "system", "content": EXTRACTION_SYSTEM_PROMPT}]
    messages += [{"role": m.role, "content": m.content} for m in history]
    messages.append({"role": "user", "content": user_message.strip()})
    return messages


def _or_unspecified(value: str) -> str:
    return value if value.strip() else "[Not specified]"


def build_prd_prompt(data: ProjectData) -> str:
    journeys = "\n".join(
        f"\nJourney {i}: {j.name or '[Unnamed]'}\n"
        f"- When: {_or_unspecified(j.when)}\n"
        f"- Trigger: {_or_unspecified(j.trigger)}\n"
        f"- Must Communicate: {_or_unspecified(j.must_communicate)}\n"
        f"- CTAs: {_or_unspecified(j.ctas)}\n"
        f"- Tone: {_or_unspecified(j.tone)}\n"
        f"- Supporting Elements: {_or_unspecified(j.supporting_elements)}\n"
        for i, j in enumerate(data.journeys, start=1)
    )
    screens = ", ".join(s for s in data.supporting_screens if s.strip())

    return f"""\
Generate a PRD based on this project information:

FEATURE NAME: {_or_unspecified(data.feature_name)}
PRODUCT/COMPANY: {_or_unspecified(data.product_company)}

PROBLEM:
{_or_unspecified(data.problem)}

TARGET USERS:
{_or_unspecified(data.target_users)}

DESIGN PRINCIPLE (North Star):
{_or_unspecified(data.design_principle)}

CRITICAL CHALLENGE:
{_or_unspecified(data.critical_challenge)}

USER JOURNEYS:
{journeys or '[No journeys defined]'}

SUPPORTING SCREENS:
{screens or '[None specified]'}

UI REQUIREMENTS:
- Platform: {_or_unspecified(data.platform)}
- Design System: {_or_unspecified(data.design_system)}
- Layout Constraints: {_or_unspecified(data.layout_constraints)}
- States Needed: {', '.join(data.states_needed) or '[Not specified]'}

Generate a complete, professional PRD document."""
