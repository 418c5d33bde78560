# designlens/services/text.py

import re
from typing import List

# "4.5:1" and "2.5 seconds" are content; only "1. " style numbering is a prefix.
_NUMBERED_PREFIX = re.compile(r"^\d+\.(?:\s+|$)")
_BULLET_PREFIX = re.compile(r"^[-•●]\s*")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
# Only hashes used as header markers; colour codes like "#777" are content.
_HEADER_HASHES = re.compile(r"(?:^|(?<=\s))#{1,6}\s+")
_WHITESPACE = re.compile(r"\s+")


def _clean_once(line: str) -> str:
    line = line.strip()
    line = _NUMBERED_PREFIX.sub("", line)
    line = _BULLET_PREFIX.sub("", line)
    line = line.replace("**", "")
    line = line.replace("*", "")
    line = line.replace("`", "")
    line = _LINK.sub(r"\1", line)
    line = _HEADER_HASHES.sub("", line)
    line = line.replace("\\n", " ")
    line = _WHITESPACE.sub(" ", line)
    return line.strip()


def normalize_line(line: str) -> str:
    """
    Strip markdown artifacts from one line of model output.

    Cleaning is repeated until nothing changes, so stacked prefixes such as
    "- 1. **Item**" collapse fully and the result is stable under re-use.
    """
    if not line:
        return ""

    current = line
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def normalize_lines(text: str) -> List[str]:
    """Normalize every line of ``text`` and drop the ones left empty."""
    if not text:
        return []
    cleaned = (normalize_line(line) for line in text.split("\n"))
    return [line for line in cleaned if line]
