"""
Showrunner Screenplay Assembler

Turns loosely-structured generated screenplay text into a typed, paginated
Document in a single left-to-right pass.

Each cleaned line is classified by the first matching rule:
1. blank line           -> empty ACTION, leaves dialogue mode
2. INT. / EXT. / INT/EXT. -> SCENE_HEADING, opens the next scene
3. transition keyword   -> TRANSITION
4. upper-case short line with dialogue ahead -> CHARACTER_CUE, enters dialogue mode
5. (wrapped in parens)  -> PARENTHETICAL
6. mixed-case line in dialogue mode -> DIALOGUE
7. anything else        -> ACTION, leaves dialogue mode

Unknown input degrades to ACTION; assembly never raises.
"""

import logging
import re
from typing import List, Optional, Set

from showrunner.core.config import ScreenplayConfig
from showrunner.core.constants import (
    ElementType,
    SCENE_HEADING_PATTERN,
    TRANSITION_KEYWORDS,
    RESERVED_CUE_KEYWORDS,
    MINUTES_PER_PAGE,
)
from showrunner.core.logging_config import get_logger
from showrunner.screenplay.cleaner import clean
from showrunner.screenplay.models import Document, DocumentMetadata, Element, Page

_SCENE_HEADING_RE = re.compile(SCENE_HEADING_PATTERN, re.IGNORECASE)
_TRANSITION_RE = re.compile(
    '^(?:' + '|'.join(re.escape(k) for k in TRANSITION_KEYWORDS) + ')',
    re.IGNORECASE
)
_RESERVED_RE = re.compile(
    r'^(?:' + '|'.join(re.escape(k) for k in RESERVED_CUE_KEYWORDS) + ')'
)


def _is_all_caps(line: str) -> bool:
    return line == line.upper()


class _PageBuilder:
    """Accumulates elements and closes a page once it passes the element limit."""

    def __init__(self, element_limit: int):
        self.element_limit = element_limit
        self.pages: List[Page] = [Page(page_number=1)]

    def add(self, element: Element) -> None:
        if len(self.pages[-1].elements) > self.element_limit:
            self.pages.append(Page(page_number=len(self.pages) + 1))
        self.pages[-1].elements.append(element)


class ScreenplayAssembler:
    """
    Classifies screenplay lines and assembles them into pages.

    The only state carried between lines is whether the scanner is inside a
    dialogue block, plus the running scene counter.
    """

    def __init__(
        self,
        config: Optional[ScreenplayConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config or ScreenplayConfig()
        self.logger = logger or get_logger("screenplay.assembler")

    def assemble(
        self,
        text: str,
        title: Optional[str] = None,
        episode_number: Optional[int] = None
    ) -> Document:
        """
        Assemble raw generated text into a Document.

        Args:
            text: Raw screenplay text, possibly carrying markup
            title: Optional episode title
            episode_number: Optional episode number

        Returns:
            Document with at least one page
        """
        lines = clean(text).split('\n')
        builder = _PageBuilder(self.config.page_element_limit)
        cue_names: Set[str] = set()

        scene_count = 0
        in_dialogue = False
        speaker: Optional[str] = None
        speaker_scene: Optional[int] = None

        for i, raw_line in enumerate(lines):
            line = raw_line.strip()
            current_scene = scene_count or None

            if not line:
                builder.add(Element(ElementType.ACTION, '', current_scene))
                in_dialogue = False
                continue

            if _SCENE_HEADING_RE.match(line):
                scene_count += 1
                builder.add(Element(ElementType.SCENE_HEADING, line.upper(), scene_count))
                in_dialogue = False
                continue

            if _TRANSITION_RE.match(line):
                builder.add(Element(ElementType.TRANSITION, line.upper(), current_scene))
                in_dialogue = False
                continue

            if self._is_cue_candidate(line) and self._dialogue_follows(lines, i):
                cue_names.add(line)
                speaker, speaker_scene = line, current_scene
                builder.add(Element(ElementType.CHARACTER_CUE, line, current_scene, character_name=line))
                in_dialogue = True
                continue

            if line.startswith('(') and line.endswith(')'):
                builder.add(Element(
                    ElementType.PARENTHETICAL,
                    line,
                    current_scene,
                    character_name=speaker if in_dialogue else None
                ))
                continue

            if in_dialogue and not _is_all_caps(line):
                builder.add(Element(ElementType.DIALOGUE, line, speaker_scene, character_name=speaker))
                continue

            builder.add(Element(ElementType.ACTION, line, current_scene))
            in_dialogue = False

        pages = builder.pages
        metadata = DocumentMetadata(
            page_count=len(pages),
            scene_count=scene_count,
            character_count=len(cue_names),
            estimated_runtime_minutes=len(pages) * MINUTES_PER_PAGE,
        )
        self.logger.debug(
            f"Assembled {len(lines)} lines into {metadata.page_count} page(s), "
            f"{metadata.scene_count} scene(s), {metadata.character_count} speaker(s)"
        )
        return Document(pages=pages, metadata=metadata, title=title, episode_number=episode_number)

    def _is_cue_candidate(self, line: str) -> bool:
        return (
            line.isupper()
            and len(line) < self.config.max_cue_length
            and '.' not in line
            and ':' not in line
            and not _RESERVED_RE.match(line)
        )

    def _dialogue_follows(self, lines: List[str], index: int) -> bool:
        """Check whether the first non-blank line in the lookahead window reads as dialogue."""
        window = lines[index + 1:index + 1 + self.config.cue_lookahead]
        for candidate in window:
            candidate = candidate.strip()
            if candidate:
                return not _is_all_caps(candidate) or candidate.startswith('(')
        return False


def assemble(
    text: str,
    title: Optional[str] = None,
    episode_number: Optional[int] = None,
    config: Optional[ScreenplayConfig] = None
) -> Document:
    """Assemble raw generated screenplay text into a Document."""
    return ScreenplayAssembler(config).assemble(text, title=title, episode_number=episode_number)
