"""
Prompt templates for casting profile generation.
"""

import json
from typing import Any, Dict, List, Optional

from showrunner.characters.models import CharacterIdentity

CASTING_SYSTEM_PROMPT = """You are a professional casting director for micro-budget web series production.

Generate a casting profile for every character you are given. For each one provide:
- archetype: the character's story function (The Hero, The Mentor, The Rival, ...)
- ageRange: {"min": number, "max": number}, the ages that read correctly for the role
- physicalRequirements: height, build, ethnicity, distinctiveFeatures, only where the story needs them
- performanceRequirements: actingStyle, emotionalRange, specialSkills (list)
- actorTemplates: 2-3 real actors as reference types, each {"name", "whyMatch"}
- castingNotes: practical notes for a micro-budget production

OUTPUT FORMAT:
- Valid JSON only, no markdown, no code blocks, no explanations
- A single object: {"cast": [ ... ]}
- Every entry carries "characterName" exactly as given
- Include every character you are given"""


def _describe(identity: CharacterIdentity, key_scenes: Optional[List[Any]]) -> str:
    lines = [f"- {identity.name} ({identity.importance.value})"]
    if identity.age:
        lines.append(f"  Age: {identity.age}")
    if identity.description:
        lines.append(f"  Description: {identity.description}")
    lines.append(f"  Scenes: {', '.join(str(s) for s in identity.scenes) or 'none listed'}")
    lines.append(f"  Dialogue lines: {identity.line_count}")
    for scene in key_scenes or []:
        lines.append(f"  Key scene {scene.scene_number} ({scene.context}):")
        lines.extend(f"    {line}" for line in scene.dialogue.split('\n') if line)
    return '\n'.join(lines)


def build_casting_prompt(batch: List[CharacterIdentity], context: Dict[str, Any]) -> str:
    """
    Build the user prompt for one batch.

    Reads optional 'episode_title' and 'key_scenes' (name -> KeyScene list)
    from the pipeline context.
    """
    key_scenes = context.get("key_scenes", {})
    title = context.get("episode_title")
    characters = '\n'.join(_describe(c, key_scenes.get(c.name)) for c in batch)
    names = json.dumps([c.name for c in batch])

    header = f"Episode: {title}\n\n" if title else ""
    return (
        f"{header}Generate casting profiles for these {len(batch)} characters:\n\n"
        f"{characters}\n\n"
        f"Return exactly one entry per character, using these characterName values: {names}"
    )
