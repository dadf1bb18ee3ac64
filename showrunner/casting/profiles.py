"""
Casting profile construction from decoded records.

Generated records are loosely shaped; every field falls back to a neutral
default so a profile is always complete.
"""

from typing import Any, Dict, List, Optional

from showrunner.core.constants import (
    DEFAULT_ACTING_STYLE,
    DEFAULT_AGE_RANGE,
    DEFAULT_ARCHETYPE,
    DEFAULT_EMOTIONAL_RANGE,
    REGENERATE_NOTE,
)
from showrunner.characters.models import CharacterIdentity, parse_importance
from showrunner.casting.models import (
    ActorTemplate,
    CastingProfile,
    PerformanceRequirements,
    PhysicalRequirements,
)

# Optional generated sections carried through untouched
EXTRA_FIELDS = (
    "characterArc",
    "keyScenes",
    "relationships",
    "backstory",
    "screenTimeMetrics",
    "objectives",
    "voiceRequirements",
    "castingPriority",
)


def _text(value: Any, default: Optional[str] = None) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _age_range(value: Any) -> Dict[str, int]:
    if isinstance(value, dict):
        low, high = value.get("min"), value.get("max")
        if isinstance(low, int) and isinstance(high, int) and 0 <= low <= high:
            return {"min": low, "max": high}
    return dict(DEFAULT_AGE_RANGE)


def _actor_templates(value: Any) -> List[ActorTemplate]:
    if not isinstance(value, list):
        return []
    return [
        ActorTemplate(
            name=_text(t.get("name"), "Unknown Actor"),
            why_match=_text(t.get("whyMatch"), "Matches character type"),
        )
        for t in value
        if isinstance(t, dict)
    ]


def build_profile(record: Dict[str, Any], identity: CharacterIdentity) -> CastingProfile:
    """
    Build a profile from a decoded record for a registry identity.

    The identity supplies the canonical name; scenes and importance come
    from the record when it carries usable values.
    """
    physical = record.get("physicalRequirements")
    physical = physical if isinstance(physical, dict) else {}
    performance = record.get("performanceRequirements")
    performance = performance if isinstance(performance, dict) else {}
    skills = performance.get("specialSkills")

    scenes = record.get("scenes")
    if isinstance(scenes, list) and all(isinstance(s, int) for s in scenes):
        scenes = tuple(scenes)
    else:
        scenes = identity.scenes

    return CastingProfile(
        character_name=identity.name,
        importance=parse_importance(record.get("priority"), default=identity.importance),
        scenes=scenes,
        line_count=identity.line_count,
        archetype=_text(record.get("archetype"), DEFAULT_ARCHETYPE),
        age_range=_age_range(record.get("ageRange")),
        physical=PhysicalRequirements(
            height=_text(physical.get("height")),
            build=_text(physical.get("build")),
            ethnicity=_text(physical.get("ethnicity")),
            distinctive_features=_text(physical.get("distinctiveFeatures")),
        ),
        performance=PerformanceRequirements(
            acting_style=_text(performance.get("actingStyle"), DEFAULT_ACTING_STYLE),
            emotional_range=_text(performance.get("emotionalRange"), DEFAULT_EMOTIONAL_RANGE),
            special_skills=[s for s in skills if isinstance(s, str)] if isinstance(skills, list) else [],
        ),
        actor_templates=_actor_templates(record.get("actorTemplates")),
        casting_notes=_text(record.get("castingNotes"), ""),
        extras={k: record[k] for k in EXTRA_FIELDS if record.get(k)},
    )


def placeholder_profile(identity: CharacterIdentity, note: str = REGENERATE_NOTE) -> CastingProfile:
    """Profile with no generated content, marked for regeneration."""
    return CastingProfile(
        character_name=identity.name,
        importance=identity.importance,
        scenes=identity.scenes,
        line_count=identity.line_count,
        casting_notes=note,
        needs_regeneration=True,
    )
