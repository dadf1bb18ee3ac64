"""
Showrunner Casting Merger

Folds per-batch decode results back onto the registry. Batches may arrive in
any order and some may never arrive; the merged result always holds exactly
one profile per registry character, in registry order.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from showrunner.core.constants import IDENTITY_FIELD, REGENERATE_NOTE
from showrunner.core.logging_config import get_logger
from showrunner.characters.models import CharacterIdentity
from showrunner.characters.normalizer import normalize
from showrunner.characters.resolver import IdentityResolver
from showrunner.casting.models import CastingProfile
from showrunner.casting.profiles import build_profile, placeholder_profile


class CastingMerger:
    """
    Collects casting profiles for a fixed registry.

    Records are matched to identities by normalized name or alias, then by
    key containment. Records that match no identity are dropped.
    """

    def __init__(
        self,
        registry: List[CharacterIdentity],
        id_field: str = IDENTITY_FIELD,
        logger: Optional[logging.Logger] = None
    ):
        self.registry = list(registry)
        self.id_field = id_field
        self.logger = logger or get_logger("casting.merger")
        self._matcher = IdentityResolver(logger=self.logger)
        self._profiles: Dict[int, CastingProfile] = {}
        self._placeholders: Dict[int, CastingProfile] = {}
        self.errors: List[str] = []

        self._by_key: Dict[str, int] = {}
        for index, identity in enumerate(self.registry):
            for key in {normalize(identity.name), *identity.aliases}:
                self._by_key.setdefault(key, index)

    def _match(self, name: str) -> Optional[int]:
        key = normalize(name)
        if not key:
            return None
        if key in self._by_key:
            return self._by_key[key]
        for known, index in self._by_key.items():
            if self._matcher.keys_match(known, key):
                return index
        return None

    def add_batch(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Add decoded records from one batch.

        Returns:
            Number of records matched to a registry character
        """
        matched = 0
        for record in records:
            index = self._match(str(record.get(self.id_field) or ""))
            if index is None:
                self.logger.warning(f"Dropping record for unknown character: {record.get(self.id_field)!r}")
                continue
            if index in self._profiles:
                continue
            self._profiles[index] = build_profile(record, self.registry[index])
            matched += 1
        return matched

    def fail_batch(self, batch: Iterable[CharacterIdentity], reason: str = "") -> None:
        """Record a failed batch; its characters get placeholder profiles unless real ones arrive."""
        if reason:
            self.errors.append(reason)
        for identity in batch:
            index = self._match(identity.name)
            if index is not None:
                self._placeholders[index] = placeholder_profile(identity, REGENERATE_NOTE)

    def missing(self) -> List[CharacterIdentity]:
        """Registry characters with no generated profile yet."""
        return [c for i, c in enumerate(self.registry) if i not in self._profiles]

    def profiles(self) -> List[CastingProfile]:
        """One profile per registry character, in registry order."""
        result = []
        for index, identity in enumerate(self.registry):
            profile = self._profiles.get(index) or self._placeholders.get(index)
            result.append(profile or placeholder_profile(identity))
        return result
