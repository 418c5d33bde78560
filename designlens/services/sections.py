# designlens/services/sections.py

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

# Markdown decoration and numbering tolerated in front of a header:
# "## 1. Accessibility", "**2) Color Contrast**", "3.Design Principles:"
_HEADER_LEAD = re.compile(r"^\s*(?:#{1,6}\s*)?(?:\*\*|__)?\s*(?:\d+[.)]\s*)?(?:\*\*|__)?\s*")
_BULLET_LINE = re.compile(r"^\s*[-•●*]\s+")


@dataclass(frozen=True)
class Section:
    name: Optional[str]
    body: str

    @property
    def lines(self) -> List[str]:
        return self.body.split("\n") if self.body else []


@dataclass(frozen=True)
class SectionVocabulary:
    """
    Header table for one analysis kind.

    ``entries`` maps a canonical section key to the header texts that open it.
    Aliases are matched longest first so "Design Comparison and Analysis"
    wins over "Design Comparison" when both are registered.
    """

    entries: Tuple[Tuple[str, Tuple[str, ...]], ...]
    _aliases: Tuple[Tuple[str, str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table: Dict[str, str] = {}
        for key, aliases in self.entries:
            for alias in aliases:
                folded = alias.strip().lower()
                if not folded:
                    continue
                owner = table.get(folded)
                if owner is not None and owner != key:
                    logger.warning(
                        "Header '{}' is registered for both '{}' and '{}'; keeping '{}'",
                        alias, owner, key, owner,
                    )
                    continue
                table[folded] = key
        ordered = sorted(table.items(), key=lambda item: len(item[0]), reverse=True)
        object.__setattr__(self, "_aliases", tuple(ordered))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "SectionVocabulary":
        return cls(tuple((key, tuple(aliases)) for key, aliases in mapping.items()))

    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]

    def match(self, line: str) -> Optional[Tuple[str, str]]:
        """
        Return ``(key, inline_text)`` when ``line`` opens a section, else None.

        The alias must be followed by end of line or a colon; whatever comes
        after the colon is returned as the first line of the section body.
        """
        if not line.strip() or _BULLET_LINE.match(line):
            return None

        candidate = _HEADER_LEAD.sub("", line, count=1)
        folded = candidate.lower()
        for alias, key in self._aliases:
            if not folded.startswith(alias):
                continue
            rest = candidate[len(alias):].lstrip(" *_#")
            if not rest:
                return key, ""
            if rest.startswith(":"):
                return key, rest[1:].lstrip(" *_").strip()
        return None


def split_sections(text: str, vocabulary: SectionVocabulary) -> List[Section]:
    """
    Scan ``text`` line by line and cut it at recognized headers.

    Lines ahead of the first header (or the whole text when there is no
    header at all) form a single unnamed section. Header-looking lines that
    are not in the vocabulary stay in the body of the section they appear in.
    """
    sections: List[Section] = []
    current_name: Optional[str] = None
    current_lines: List[str] = []
    seen_header = False

    def close() -> None:
        body = "\n".join(current_lines).strip("\n")
        if current_name is not None or body.strip():
            sections.append(Section(current_name, body))

    for raw_line in (text or "").splitlines():
        matched = vocabulary.match(raw_line)
        if matched is None:
            current_lines.append(raw_line)
            continue

        name, inline = matched
        if seen_header and name == current_name and not any(line.strip() for line in current_lines):
            # Header repeated straight after itself ("1. Accessibility" then "**Accessibility:**")
            if inline:
                current_lines.append(inline)
            continue

        if seen_header or current_lines:
            close()
        seen_header = True
        current_name = name
        current_lines = [inline] if inline else []

    if seen_header or current_lines:
        close()

    logger.debug("Split response into sections: {}", [s.name for s in sections])
    return sections


def sections_by_name(sections: Sequence[Section]) -> Dict[str, Section]:
    """Index named sections by key; the first occurrence of a key wins."""
    indexed: Dict[str, Section] = {}
    for section in sections:
        if section.name is not None and section.name not in indexed:
            indexed[section.name] = section
    return indexed
