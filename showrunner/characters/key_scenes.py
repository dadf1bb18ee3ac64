"""
Key scene selection for casting.

Picks the scenes where a character speaks most, with their dialogue, so a
casting profile can point at audition material.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from showrunner.core.constants import ElementType
from showrunner.characters.models import CharacterIdentity, coerce_breakdown
from showrunner.characters.normalizer import normalize
from showrunner.screenplay.models import Document

MAX_KEY_SCENES = 3


@dataclass(frozen=True)
class KeyScene:
    """A scene featuring a character, with the character's dialogue."""
    scene_number: int
    context: str
    dialogue: str
    line_count: int
    episode_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scene_number": self.scene_number,
            "episode_number": self.episode_number,
            "context": self.context,
            "dialogue": self.dialogue,
            "line_count": self.line_count,
        }


def key_scenes_for(
    character: Union[str, CharacterIdentity],
    document: Document,
    breakdown: Iterable[Any],
    max_scenes: int = MAX_KEY_SCENES
) -> List[KeyScene]:
    """
    Select up to max_scenes scenes for a character.

    Candidate scenes are the breakdown scenes listing the character. Each
    carries the character's dialogue from the document; the result is sorted
    by dialogue line count (descending), then scene number. A resolved
    identity matches on any of its aliases, a plain name on its own key.
    """
    if isinstance(character, CharacterIdentity):
        keys = set(character.aliases) | {normalize(character.name)}
    else:
        keys = {normalize(character)}
    dialogue: Dict[int, List[str]] = {}
    context: Dict[int, List[str]] = {}

    for element in document.elements():
        scene = element.scene_index
        if scene is None:
            continue
        if element.element_type is ElementType.DIALOGUE and element.character_name:
            if normalize(element.character_name) in keys:
                dialogue.setdefault(scene, []).append(element.content)
        elif element.element_type in (ElementType.SCENE_HEADING, ElementType.ACTION) and element.content:
            context.setdefault(scene, []).append(element.content)

    scenes: List[KeyScene] = []
    for scene in coerce_breakdown(breakdown):
        if not any(normalize(entry.name) in keys for entry in scene.characters):
            continue
        lines = dialogue.get(scene.scene_number, [])
        summary = scene.scene_title or scene.location or ' | '.join(context.get(scene.scene_number, [])[:3])
        scenes.append(KeyScene(
            scene_number=scene.scene_number,
            context=summary or "Scene context",
            dialogue='\n'.join(lines),
            line_count=len(lines),
            episode_number=document.episode_number,
        ))

    scenes.sort(key=lambda s: (-s.line_count, s.scene_number))
    return scenes[:max_scenes]
