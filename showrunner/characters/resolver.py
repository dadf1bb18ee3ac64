"""
Showrunner Identity Resolver

Collapses raw name variants ("JASON", "JASON CALACANIS", "Jason (V.O.)")
into canonical character identities using normalized-key containment.

Names are visited longest key first, so a short variant always meets the
longer form it belongs to before it could start an entry of its own.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Union

from showrunner.core.config import ResolutionConfig
from showrunner.core.constants import DEFAULT_IMPORTANCE, ImportanceTier
from showrunner.core.logging_config import get_logger
from showrunner.characters.models import CharacterIdentity, RawCharacterMention
from showrunner.characters.normalizer import display, normalize, strip_annotations

MentionLike = Union[RawCharacterMention, str]


@dataclass
class _Entry:
    """Mutable accumulator for one canonical identity during resolution."""
    canonical: str
    first_seen: int
    aliases: Set[str] = field(default_factory=set)
    line_count: int = 0
    scenes: Set[int] = field(default_factory=set)
    importance: Optional[ImportanceTier] = None

    def fold(self, mention: RawCharacterMention) -> None:
        self.line_count += mention.line_count
        if mention.scene_index is not None:
            self.scenes.add(mention.scene_index)
        if mention.importance is not None:
            if self.importance is None or mention.importance.rank < self.importance.rank:
                self.importance = mention.importance

    def to_identity(self) -> CharacterIdentity:
        return CharacterIdentity(
            name=display(self.canonical),
            aliases=frozenset(self.aliases),
            importance=self.importance or DEFAULT_IMPORTANCE,
            line_count=self.line_count,
            scenes=tuple(sorted(self.scenes)),
        )


class IdentityResolver:
    """
    Resolves raw character mentions into canonical identities.

    Two keys merge when one contains the other. The optional guards in
    ResolutionConfig (minimum key length, word boundary) narrow that rule.
    """

    def __init__(
        self,
        config: Optional[ResolutionConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config or ResolutionConfig()
        self.logger = logger or get_logger("characters.resolver")

    def keys_match(self, existing: str, key: str) -> bool:
        """Return True when two normalized keys name the same character."""
        if existing == key:
            return True
        if key in existing:
            shorter, longer = key, existing
        elif existing in key:
            shorter, longer = existing, key
        else:
            return False

        if len(shorter) < self.config.min_merge_key_length:
            return False
        if self.config.require_word_boundary:
            pattern = r'(?<!\w)' + re.escape(shorter) + r'(?!\w)'
            return re.search(pattern, longer) is not None
        return True

    def resolve(self, mentions: Iterable[MentionLike]) -> List[CharacterIdentity]:
        """
        Resolve mentions into identities.

        Args:
            mentions: RawCharacterMention objects or bare name strings

        Returns:
            One CharacterIdentity per canonical character, in order of first mention
        """
        mentions = [
            m if isinstance(m, RawCharacterMention) else RawCharacterMention(name=m)
            for m in mentions
        ]

        first_seen: Dict[str, int] = {}
        for index, mention in enumerate(mentions):
            stripped = strip_annotations(mention.name)
            if stripped and stripped not in first_seen:
                first_seen[stripped] = index

        ordered = sorted(first_seen, key=lambda n: (-len(n), first_seen[n]))

        entries: List[_Entry] = []
        by_key: Dict[str, _Entry] = {}
        by_name: Dict[str, _Entry] = {}
        for name in ordered:
            key = normalize(name)
            entry = next((e for k, e in by_key.items() if self.keys_match(k, key)), None)
            if entry is None:
                entry = _Entry(canonical=name, first_seen=first_seen[name])
                entries.append(entry)
            else:
                if len(name) > len(entry.canonical):
                    entry.canonical = name
                entry.first_seen = min(entry.first_seen, first_seen[name])
            entry.aliases.add(key)
            by_key[key] = entry
            by_name[name] = entry

        for mention in mentions:
            entry = by_name.get(strip_annotations(mention.name))
            if entry is not None:
                entry.fold(mention)

        entries.sort(key=lambda e: e.first_seen)
        identities = [e.to_identity() for e in entries]
        self.logger.debug(f"Resolved {len(mentions)} mention(s) into {len(identities)} identities")
        return identities


def resolve(
    mentions: Iterable[MentionLike],
    config: Optional[ResolutionConfig] = None
) -> List[CharacterIdentity]:
    """Resolve raw mentions into canonical identities."""
    return IdentityResolver(config).resolve(mentions)
