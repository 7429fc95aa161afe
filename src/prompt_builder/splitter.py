import re
from collections.abc import Callable, Mapping

from prompt_builder import limits as budget
from prompt_builder.models import PlatformLimit, PromptPart, SplitStrategy

MARKER_RESERVE = 150  # chars of the budget kept free for header + footer
BREAK_THRESHOLD = 0.6  # a soft break must sit past this fraction of the budget

_H2 = re.compile(r"(?=^## )", re.MULTILINE)
_H3 = re.compile(r"(?=^### )", re.MULTILINE)
_ANY_HEADING = re.compile(r"(?=^#{1,4}\s)", re.MULTILINE)
_PHASE = re.compile(r"(?=^(?:##\s*)?(?:Phase|Step|Part|Stage)\s*\d)", re.MULTILINE | re.IGNORECASE)
_PARAGRAPH = re.compile(r"\n\n+")

_HEADER = re.compile(r"\A---\n\*\*PART \d+ OF \d+\*\*\n---\n\n")
_FOOTER = re.compile(
    r"\n\n---\n\*This is (?:part \d+ of \d+\. After completing this prompt, ask for part \d+\."
    r"|the final part \(\d+ of \d+\)\. Implementation is complete\.)\*\Z"
)


def _split_on(pattern: re.Pattern, text: str) -> list[str]:
    return [s for s in pattern.split(text) if s.strip()]


def split_by_paragraphs(text: str) -> list[str]:
    return _split_on(_PARAGRAPH, text)


def split_by_headings(text: str) -> list[str]:
    sections = _split_on(_ANY_HEADING, text)
    if len(sections) <= 1:
        return split_by_paragraphs(text)
    return sections


def split_by_sections(text: str) -> list[str]:
    sections = _split_on(_H2, text)
    if len(sections) <= 1:
        return split_by_headings(text)
    return sections


def split_by_features(text: str) -> list[str]:
    sections = _split_on(_H2, text)
    if len(sections) > 1:
        return sections
    sections = _split_on(_H3, text)
    if len(sections) <= 1:
        return split_by_paragraphs(text)
    return sections


def split_by_phases(text: str) -> list[str]:
    phases = _split_on(_PHASE, text)
    if len(phases) <= 1:
        return split_by_sections(text)
    return phases


STRATEGIES: dict[SplitStrategy, Callable[[str], list[str]]] = {
    SplitStrategy.SECTIONS: split_by_sections,
    SplitStrategy.FEATURES: split_by_features,
    SplitStrategy.PHASES: split_by_phases,
}


def force_split(text: str, limit: int) -> list[str]:
    limit = max(limit, 1)
    threshold = limit * BREAK_THRESHOLD
    parts: list[str] = []
    remaining = text

    while len(remaining) > limit:
        window = remaining[:limit]
        last_paragraph = window.rfind("\n\n")
        last_sentence = window.rfind(". ")
        last_newline = window.rfind("\n")

        if last_paragraph > threshold:
            cut = last_paragraph
        elif last_sentence > threshold:
            cut = last_sentence + 1  # keep the period
        elif last_newline > threshold:
            cut = last_newline
        else:
            cut = limit

        piece = remaining[:cut].strip()
        if piece:
            parts.append(piece)
        remaining = remaining[cut:].strip()

    if remaining:
        parts.append(remaining)
    return parts


def merge_small_parts(fragments: list[str], limit: int) -> list[str]:
    # Greedy left-to-right packing; a fragment that would overflow starts a new part
    effective = limit - MARKER_RESERVE
    merged: list[str] = []
    current = ""

    for fragment in fragments:
        if not current:
            current = fragment
        elif len(current) + len(fragment) + 2 <= effective:
            current += "\n\n" + fragment
        else:
            merged.append(current)
            current = fragment

    if current:
        merged.append(current)

    result: list[str] = []
    for part in merged:
        if len(part) <= effective:
            result.append(part)
        else:
            result.extend(force_split(part, effective))
    return result


def add_part_indicator(content: str, part_number: int, total_parts: int) -> str:
    if total_parts == 1:
        return content

    header = f"---\n**PART {part_number} OF {total_parts}**\n---\n\n"
    if part_number < total_parts:
        footer = (
            f"\n\n---\n*This is part {part_number} of {total_parts}. "
            f"After completing this prompt, ask for part {part_number + 1}.*"
        )
    else:
        footer = f"\n\n---\n*This is the final part ({part_number} of {total_parts}). Implementation is complete.*"
    return header + content + footer


def strip_part_indicator(content: str) -> str:
    content = _HEADER.sub("", content, count=1)
    return _FOOTER.sub("", content, count=1)


def split_prompt(
    text: str,
    platform: str,
    limits: Mapping[str, PlatformLimit] | None = None,
) -> list[PromptPart]:
    entry = budget.platform_limit(platform, limits)

    if len(text) <= entry.max_chars:
        return [PromptPart(part_number=1, total_parts=1, content=text, char_count=len(text))]

    fragments = STRATEGIES[entry.split_strategy](text)
    bodies = merge_small_parts(fragments, entry.max_chars) or [text.strip()]

    total = len(bodies)
    parts = []
    for number, body in enumerate(bodies, start=1):
        content = add_part_indicator(body, number, total)
        parts.append(
            PromptPart(part_number=number, total_parts=total, content=content, char_count=len(content))
        )
    return parts


def export_all_parts(parts: list[PromptPart]) -> str:
    if len(parts) == 1:
        return parts[0].content
    blocks = [
        f"{'=' * 20} PART {p.part_number} OF {p.total_parts} {'=' * 20}\n\n{p.content}"
        for p in parts
    ]
    return "\n\n\n".join(blocks)
