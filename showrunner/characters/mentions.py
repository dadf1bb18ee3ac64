"""
Raw character mention extraction.

Mentions come from two places: character cues in an assembled document
(with the dialogue lines spoken under each cue) and scene breakdown entries.
"""

import re
from typing import Iterable, List, Optional

from showrunner.core.constants import ElementType, MIN_CHARACTER_NAME_LENGTH, NOISE_NAMES
from showrunner.characters.models import RawCharacterMention, SceneBreakdown
from showrunner.characters.normalizer import strip_annotations
from showrunner.screenplay.models import Document

# "JASON CALACANIS (50s) walks in." introduces a character inside action
_INTRODUCTION_RE = re.compile(r"\b([A-Z][A-Z'\-]+(?:[ \t]+[A-Z][A-Z'\-]+)*)[ \t]*\(\d+s?\)")


def is_noise_name(name: str) -> bool:
    """True for group names (CROWD, ALL, ...) and names too short to cast."""
    stripped = strip_annotations(name)
    if len(stripped) < MIN_CHARACTER_NAME_LENGTH:
        return True
    return name.strip().upper() in NOISE_NAMES or stripped.upper() in NOISE_NAMES


def extract_mentions(document: Document) -> List[RawCharacterMention]:
    """
    Collect mentions from character cues and action-line introductions.

    Each cue yields one mention whose line count is the number of dialogue
    elements spoken under it.
    """
    mentions: List[RawCharacterMention] = []
    cue: Optional[str] = None
    cue_scene: Optional[int] = None
    lines = 0

    def flush() -> None:
        if cue is not None and not is_noise_name(cue):
            mentions.append(RawCharacterMention(name=cue, scene_index=cue_scene, line_count=lines))

    for element in document.elements():
        if element.element_type is ElementType.CHARACTER_CUE:
            flush()
            cue, cue_scene, lines = element.character_name, element.scene_index, 0
        elif element.element_type is ElementType.DIALOGUE:
            if cue is not None and element.character_name == cue:
                lines += 1
        elif element.element_type is ElementType.ACTION and element.content:
            for match in _INTRODUCTION_RE.finditer(element.content):
                name = match.group(1)
                if not is_noise_name(name):
                    mentions.append(RawCharacterMention(name=name, scene_index=element.scene_index))
    flush()
    return mentions


def mentions_from_breakdown(breakdown: Iterable[SceneBreakdown]) -> List[RawCharacterMention]:
    """Turn breakdown entries into mentions carrying scene, line count and importance."""
    return [
        RawCharacterMention(
            name=entry.name,
            scene_index=scene.scene_number,
            line_count=entry.line_count,
            importance=entry.importance,
        )
        for scene in breakdown
        for entry in scene.characters
        if not is_noise_name(entry.name)
    ]
