"""
Showrunner Character Registry

Builds the ordered list of characters to cast. The story bible is the
authority on who exists; screenplay mentions and the scene breakdown only
contribute scene and line statistics to characters the bible already names.
Without a story bible, screenplay mentions and breakdown entries are resolved
together and ordered the same way.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from showrunner.core.config import ResolutionConfig
from showrunner.core.constants import DEFAULT_IMPORTANCE
from showrunner.core.logging_config import get_logger
from showrunner.characters.models import (
    AuthoritativeCharacter,
    CharacterIdentity,
    RawCharacterMention,
    SceneBreakdown,
    coerce_authoritative,
    coerce_breakdown,
)
from showrunner.characters.mentions import mentions_from_breakdown
from showrunner.characters.normalizer import display, normalize, strip_annotations
from showrunner.characters.resolver import IdentityResolver


def sort_identities(identities: Iterable[CharacterIdentity]) -> List[CharacterIdentity]:
    """Order by importance tier (lead first), then by descending line count."""
    return sorted(identities, key=lambda c: (c.importance.rank, -c.line_count))


class CharacterRegistryBuilder:
    """
    Produces the canonical registry from a story bible, extracted mentions
    and a scene breakdown.
    """

    def __init__(
        self,
        config: Optional[ResolutionConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.logger = logger or get_logger("characters.registry")
        self.resolver = IdentityResolver(config, logger=self.logger)

    def build(
        self,
        authoritative: Optional[Iterable[Any]] = None,
        extracted: Optional[Iterable[RawCharacterMention]] = None,
        breakdown: Optional[Iterable[Any]] = None
    ) -> List[CharacterIdentity]:
        """
        Build the ordered registry.

        Args:
            authoritative: Story bible characters (dicts or AuthoritativeCharacter)
            extracted: Mentions pulled from the screenplay
            breakdown: Breakdown scenes (dicts or SceneBreakdown)

        Returns:
            Identities sorted by importance tier, then line count
        """
        characters = coerce_authoritative(authoritative, self.logger)
        scenes = coerce_breakdown(breakdown, self.logger)
        if not characters:
            self.logger.debug("No authoritative characters, resolving mentions and breakdown entries")
            mentions = list(extracted or []) + mentions_from_breakdown(scenes)
            return sort_identities(self.resolver.resolve(mentions))

        resolved = self.resolver.resolve(extracted or [])

        registry: List[CharacterIdentity] = []
        seen: Set[str] = set()
        for character in characters:
            key = normalize(character.name)
            if not key or key in seen:
                continue
            seen.add(key)
            registry.append(self._canonicalize(character, key, resolved, scenes))

        ignored = self._unknown_breakdown_names(scenes, seen)
        if ignored:
            self.logger.debug(f"Ignoring breakdown characters not in the story bible: {sorted(ignored)}")

        registry = sort_identities(registry)
        self.logger.info(f"Built registry of {len(registry)} character(s)")
        return registry

    def _best_match(self, key: str, resolved: List[CharacterIdentity]) -> Optional[CharacterIdentity]:
        for identity in resolved:
            if key in identity.aliases:
                return identity

        best, best_len = None, 0
        for identity in resolved:
            for alias in identity.aliases:
                if self.resolver.keys_match(alias, key):
                    overlap = min(len(alias), len(key))
                    if overlap > best_len:
                        best, best_len = identity, overlap
        return best

    def _canonicalize(
        self,
        character: AuthoritativeCharacter,
        key: str,
        resolved: List[CharacterIdentity],
        scenes: List[SceneBreakdown]
    ) -> CharacterIdentity:
        match = self._best_match(key, resolved)
        aliases = {key}
        scene_indices: Set[int] = set()
        line_count = 0
        importance = character.importance
        if match is not None:
            aliases |= match.aliases
            scene_indices.update(match.scenes)
            line_count += match.line_count
            importance = importance or match.importance

        for scene in scenes:
            for entry in scene.characters:
                if normalize(entry.name) == key:
                    scene_indices.add(scene.scene_number)
                    line_count += entry.line_count

        return CharacterIdentity(
            name=display(strip_annotations(character.name)),
            aliases=frozenset(aliases),
            importance=importance or DEFAULT_IMPORTANCE,
            line_count=line_count,
            scenes=tuple(sorted(scene_indices)),
            age=character.age,
            description=character.description,
        )

    @staticmethod
    def _unknown_breakdown_names(scenes: List[SceneBreakdown], known: Set[str]) -> Set[str]:
        return {
            entry.name
            for scene in scenes
            for entry in scene.characters
            if normalize(entry.name) not in known
        }


def build_registry(
    authoritative: Optional[Iterable[Any]] = None,
    extracted: Optional[Iterable[RawCharacterMention]] = None,
    breakdown: Optional[Iterable[Any]] = None,
    config: Optional[ResolutionConfig] = None
) -> List[CharacterIdentity]:
    """Build the ordered character registry."""
    return CharacterRegistryBuilder(config).build(authoritative, extracted, breakdown)


def registry_summary(registry: List[CharacterIdentity]) -> Dict[str, int]:
    """Count registry members per importance tier."""
    counts: Dict[str, int] = {}
    for identity in registry:
        counts[identity.importance.value] = counts.get(identity.importance.value, 0) + 1
    return counts
