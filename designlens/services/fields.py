# designlens/services/fields.py

import re
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from designlens.services.text import normalize_line, normalize_lines

RATINGS: Tuple[str, ...] = ("High", "Medium", "Low")
TIMELINES: Tuple[str, ...] = ("Short-term", "Medium-term", "Long-term")
PHASES: Tuple[str, ...] = ("Phase 1", "Phase 2", "Phase 3")

DEFAULT_RATING = "Medium"
DEFAULT_TIMELINE = "Medium-term"
DEFAULT_PHASE = "Phase 2"

# Bullets, numbering and bold markers allowed before a label:
# "- Impact: High", "2. **Test Name:** Sticky CTA", "**Priority**: Low"
_LABEL_LEAD = r"^\s*(?:[-•●*]\s+|\d+[.)]\s*)*(?:\*\*|__)?\s*"
_LABEL_TAIL = r"\s*(?:\*\*|__)?\s*:\s*(?:\*\*|__)?\s*(?P<rest>.*)$"
# "1,000" is one figure, not two items.
_INLINE_SEPARATOR = re.compile(r"\s*[,;](?!\d)\s*")


@lru_cache(maxsize=None)
def _label_pattern(label: str) -> "re.Pattern[str]":
    return re.compile(_LABEL_LEAD + re.escape(label) + _LABEL_TAIL, re.IGNORECASE)


def match_label(line: str, label: str) -> Optional[str]:
    """Return the text after ``label:`` when ``line`` starts with that label."""
    found = _label_pattern(label).match(line)
    if found is None:
        return None
    return found.group("rest")


def _starts_with_any(line: str, labels: Sequence[str]) -> bool:
    return any(match_label(line, label) is not None for label in labels)


def extract_span(body: str, label: str, labels: Sequence[str] = ()) -> Optional[str]:
    """
    Locate the first ``label:`` line in ``body`` and return everything after
    the colon, continuing over following lines until another known label
    starts or the body ends. Returns None when the label is absent.
    """
    stop_labels = [other for other in labels if other.lower() != label.lower()]
    lines = body.split("\n") if body else []

    for index, line in enumerate(lines):
        rest = match_label(line, label)
        if rest is None:
            continue

        captured = [rest] if rest.strip() else []
        for follow in lines[index + 1:]:
            if _starts_with_any(follow, stop_labels) or match_label(follow, label) is not None:
                break
            captured.append(follow)
        return "\n".join(captured)

    return None


def extract_text(body: str, label: str, labels: Sequence[str] = ()) -> Optional[str]:
    span = extract_span(body, label, labels)
    if span is None:
        return None
    text = " ".join(normalize_lines(span))
    return text or None


def extract_list(body: str, label: str, labels: Sequence[str] = ()) -> List[str]:
    """One item per line; a single inline line is split on commas and semicolons."""
    span = extract_span(body, label, labels)
    if span is None:
        return []
    items = normalize_lines(span)
    if len(items) == 1:
        items = [item for item in _INLINE_SEPARATOR.split(items[0]) if item]
    return items


def match_choice(value: Optional[str], choices: Sequence[str], default: str) -> str:
    """
    Map free text onto a fixed enumeration, case-insensitively.

    The choice that appears earliest in ``value`` wins ("High, maybe Medium"
    is High); anything unrecognized falls back to ``default``. Spaces and
    hyphens between words are interchangeable, so "short term" is Short-term.
    """
    if not value:
        return default

    best: Optional[Tuple[int, str]] = None
    for choice in choices:
        body = r"[\s-]*".join(re.escape(part) for part in re.split(r"[\s-]+", choice))
        pattern = r"(?<![\w-])" + body + r"(?![\w-])"
        found = re.search(pattern, value, re.IGNORECASE)
        if found and (best is None or found.start() < best[0]):
            best = (found.start(), choice)
    return best[1] if best else default


def extract_enum(
    body: str,
    label: str,
    choices: Sequence[str],
    default: str,
    labels: Sequence[str] = (),
) -> str:
    return match_choice(extract_span(body, label, labels), choices, default)


def split_blocks(body: str, start_label: str) -> Tuple[List[str], List[str]]:
    """
    Cut ``body`` into blocks that each open with a ``start_label:`` line.

    Returns ``(loose_lines, blocks)``: normalized lines found before the
    first block, and the raw text of every block in source order.
    """
    loose: List[str] = []
    blocks: List[List[str]] = []

    for line in (body or "").split("\n"):
        if match_label(line, start_label) is not None:
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)
        else:
            cleaned = normalize_line(line)
            if cleaned:
                loose.append(cleaned)

    return loose, ["\n".join(block) for block in blocks]
