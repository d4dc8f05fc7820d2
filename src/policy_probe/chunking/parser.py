# chunking/parser.py

"""Structural parser: turns raw policy text into a forest of sections.

Two numbering schemes are recognised:

- markdown headings (``#``, ``##``, ``###``), numbered from per-parse counters
- outline numbers (``1.``, ``1.2.``, ``2.3.4.``, ``1.1``), whose literal number
  becomes the path

The schemes are independent. A document that mixes them can end up with two
sections sharing a path (an H1 counted as "1" next to an outline "1."); no
reconciliation is attempted.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .models import Section

logger = logging.getLogger(__name__)


class HeadingKind(str, Enum):
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    NUMBERED = "numbered"


@dataclass(frozen=True)
class Heading:
    kind: HeadingKind
    text: str
    number: str | None = None  # only for NUMBERED


# Checked in order against the same stripped line; first match wins.
_MARKDOWN_PATTERNS: tuple[tuple[HeadingKind, re.Pattern[str]], ...] = (
    (HeadingKind.H1, re.compile(r"^#\s+(.+)$")),
    (HeadingKind.H2, re.compile(r"^##\s+(.+)$")),
    (HeadingKind.H3, re.compile(r"^###\s+(.+)$")),
)
_NUMBERED_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(\d+(?:\.\d+)*)\.\s+(.+)$"),
    # "1.1 Title": dotted outline numbers without the trailing dot; the title
    # must start uppercase so "3.5 million employees" stays body text
    re.compile(r"^(\d+(?:\.\d+)+)\s+([A-Z].*)$"),
)


def match_heading(line: str) -> Heading | None:
    """Classify a single line, returning None for body text."""
    stripped = line.strip()
    for kind, pattern in _MARKDOWN_PATTERNS:
        match = pattern.match(stripped)
        if match:
            return Heading(kind=kind, text=match.group(1))
    for pattern in _NUMBERED_PATTERNS:
        match = pattern.match(stripped)
        if match:
            return Heading(
                kind=HeadingKind.NUMBERED,
                number=match.group(1),
                text=match.group(2),
            )
    return None


@dataclass
class _HeadingCounters:
    h1: int = 0
    h2: int = 0
    h3: int = 0

    def open(self, heading: Heading) -> tuple[int, str]:
        """Advance the counters for ``heading`` and return its (level, path)."""
        if heading.kind is HeadingKind.H1:
            self.h1 += 1
            self.h2 = 0
            self.h3 = 0
            return 1, f"{self.h1}"
        if heading.kind is HeadingKind.H2:
            self.h2 += 1
            self.h3 = 0
            return 2, f"{self.h1}.{self.h2}"
        if heading.kind is HeadingKind.H3:
            self.h3 += 1
            return 3, f"{self.h1}.{self.h2}.{self.h3}"

        # outline numbers leave the markdown counters alone
        number = heading.number or ""
        return len(number.split(".")), number


def scan_sections(text: str) -> list[Section]:
    """Linear scan producing sections in document order, without nesting."""
    sections: list[Section] = []
    counters = _HeadingCounters()
    current: Section | None = None
    body: list[str] = []
    discarded = 0

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        heading = match_heading(line)

        if heading is not None:
            if current is not None:
                current.content = "\n".join(body).strip()
                sections.append(current)
            level, path = counters.open(heading)
            current = Section(heading=heading.text, level=level, path=path)
            body = []
        elif line:
            if current is None:
                discarded += 1
            else:
                body.append(line)

    if current is not None:
        current.content = "\n".join(body).strip()
        sections.append(current)

    if sections and discarded:
        logger.debug("Discarded %d line(s) before the first heading", discarded)
    return sections


def build_hierarchy(sections: list[Section]) -> list[Section]:
    """Nest a flat, ordered section list by level.

    A section becomes a child of the closest preceding section with a lower
    level. Skipped levels (H1 followed by H3) nest directly.
    """
    roots: list[Section] = []
    stack: list[Section] = []

    for section in sections:
        while stack and stack[-1].level >= section.level:
            stack.pop()

        if stack:
            stack[-1].children.append(section)
        else:
            roots.append(section)

        stack.append(section)

    return roots


def parse_sections(text: str) -> list[Section]:
    """Parse ``text`` into an ordered forest. Returns [] when no headings exist."""
    return build_hierarchy(scan_sections(text))
