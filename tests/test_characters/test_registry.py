"""
Tests for Character Registry Builder

Tests for showrunner/characters/registry.py
"""

from showrunner.core.constants import ImportanceTier
from showrunner.characters.mentions import extract_mentions
from showrunner.characters.models import CharacterIdentity, RawCharacterMention
from showrunner.characters.registry import (
    CharacterRegistryBuilder,
    build_registry,
    registry_summary,
    sort_identities,
)


class TestBuildRegistry:
    """Tests for building the canonical registry."""

    def test_story_bible_is_canon(self, sample_document, sample_story_bible, sample_breakdown):
        registry = build_registry(sample_story_bible, extract_mentions(sample_document), sample_breakdown)

        assert [c.name for c in registry] == ["Jason Calacanis", "Maya Chen", "Officer Diaz"]

    def test_breakdown_only_character_excluded(self, sample_document, sample_story_bible, sample_breakdown):
        registry = build_registry(sample_story_bible, extract_mentions(sample_document), sample_breakdown)

        assert all("ghost" not in c.aliases for c in registry)
        assert all(c.name != "Ghost" for c in registry)

    def test_statistics_from_mentions_and_breakdown(
        self, sample_document, sample_story_bible, sample_breakdown
    ):
        registry = build_registry(sample_story_bible, extract_mentions(sample_document), sample_breakdown)
        jason, maya, diaz = registry

        assert jason.importance is ImportanceTier.LEAD
        assert jason.aliases == frozenset({"jason calacanis", "jason"})
        assert jason.scenes == (1, 2)
        assert jason.line_count == 3
        assert jason.age == "50s"

        assert maya.aliases == frozenset({"maya chen", "maya"})
        assert maya.line_count == 4
        assert maya.description == "Jason's co-founder"

        assert diaz.importance is ImportanceTier.BACKGROUND
        assert diaz.line_count == 0
        assert diaz.scenes == ()

    def test_empty_bible_falls_back_to_mentions_and_breakdown(self, sample_document, sample_breakdown):
        registry = build_registry([], extract_mentions(sample_document), sample_breakdown)
        jason, maya, ghost = registry

        assert [c.name for c in registry] == ["Jason Calacanis", "Maya Chen", "Ghost"]
        assert jason.importance is ImportanceTier.LEAD
        assert jason.line_count == 4
        assert maya.aliases == frozenset({"maya chen", "maya"})
        assert maya.line_count == 4
        assert maya.scenes == (1, 2)
        assert ghost.line_count == 3

    def test_empty_bible_sorted_by_importance(self):
        registry = build_registry(
            [],
            [
                RawCharacterMention("EXTRA GUY", 1, 1, ImportanceTier.BACKGROUND),
                RawCharacterMention("MAYA", 1, 9, ImportanceTier.LEAD),
            ],
            []
        )

        assert [c.name for c in registry] == ["Maya", "Extra Guy"]

    def test_empty_bible_uses_breakdown_tiers(self):
        registry = build_registry(
            [],
            [],
            [
                {"sceneNumber": 1, "characters": [{"name": "BARTENDER", "lineCount": 5, "importance": "background"}]},
                {"sceneNumber": 2, "characters": [{"name": "HERO", "lineCount": 1, "importance": "lead"}]},
            ]
        )

        assert [(c.name, c.importance) for c in registry] == [
            ("Hero", ImportanceTier.LEAD),
            ("Bartender", ImportanceTier.BACKGROUND),
        ]

    def test_duplicate_bible_entries(self):
        registry = build_registry(
            [{"name": "MAYA"}, {"name": "Maya"}, {"name": "Maya (V.O.)"}],
            [],
            []
        )

        assert [c.name for c in registry] == ["Maya"]

    def test_ordering(self):
        registry = build_registry(
            [
                {"name": "Extra One", "role": "extra"},
                {"name": "Sidekick", "role": "supporting"},
                {"name": "Hero", "role": "lead"},
                {"name": "Mentor", "role": "supporting"},
            ],
            [],
            [
                {"sceneNumber": 1, "characters": [{"name": "MENTOR", "lineCount": 9}]},
                {"sceneNumber": 2, "characters": [{"name": "SIDEKICK", "lineCount": 2}]},
            ]
        )

        assert [c.name for c in registry] == ["Hero", "Mentor", "Sidekick", "Extra One"]

    def test_invalid_bible_entries_skipped(self):
        builder = CharacterRegistryBuilder()

        registry = builder.build([{"role": "lead"}, {"name": "Jo"}], [], None)

        assert [c.name for c in registry] == ["Jo"]


class TestHelpers:
    def test_sort_is_stable(self):
        a = CharacterIdentity("A", importance=ImportanceTier.SUPPORTING, line_count=1)
        b = CharacterIdentity("B", importance=ImportanceTier.SUPPORTING, line_count=1)

        assert sort_identities([b, a]) == [b, a]

    def test_summary(self):
        registry = [
            CharacterIdentity("A", importance=ImportanceTier.LEAD),
            CharacterIdentity("B"),
            CharacterIdentity("C"),
        ]

        assert registry_summary(registry) == {"lead": 1, "supporting": 2}
