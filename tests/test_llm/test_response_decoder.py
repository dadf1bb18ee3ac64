"""
Tests for Resilient Response Decoder

Tests for showrunner/llm/response_decoder.py
"""

import json

import pytest

from showrunner.core.exceptions import NoRecoverableRecordsError
from showrunner.llm.response_decoder import (
    DecodeTier,
    ResilientResponseDecoder,
    decode,
    looks_truncated,
)


@pytest.fixture
def decoder():
    return ResilientResponseDecoder()


def names(records):
    return [r["characterName"] for r in records]


class TestDirectTier:
    """Well-formed and lightly damaged responses parse directly."""

    def test_well_formed(self, decoder):
        text = '{"cast": [{"characterName": "A", "age": 30}, {"characterName": "B"}]}'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.DIRECT
        assert result.records == json.loads(text)["cast"]
        assert result.attempts == [DecodeTier.DIRECT]

    def test_fences_comments_and_trailing_commas(self, decoder):
        text = '```json\n{"cast": [ // first\n {"characterName": "A", "note": "http://x"},\n]}\n```'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.DIRECT
        assert result.records == [{"characterName": "A", "note": "http://x"}]

    def test_fixture_response(self, decoder, cast_response):
        assert names(decoder.decode(cast_response)) == ["Jason Calacanis", "Maya Chen"]

    def test_fence_inside_string_value(self, decoder):
        text = '{"cast": [{"characterName": "A", "castingNotes": "use ```x``` here"}]}'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.DIRECT
        assert result.records == json.loads(text)["cast"]

    def test_fenced_response_with_fence_in_value(self, decoder):
        text = '```json\n{"cast": [{"characterName": "A", "castingNotes": "```md block```"}]}\n```'

        assert decoder.decode(text)[0]["castingNotes"] == "```md block```"

    def test_bare_list(self, decoder):
        assert names(decoder.decode('[{"characterName": "A"}]')) == ["A"]


class TestRepairTier:
    """Truncated responses are closed off."""

    def test_truncated_mid_object(self, decoder):
        result = decoder.decode_with_report('{"cast":[{"characterName":"A"},{"characterName":"B"')

        assert result.tier is DecodeTier.REPAIRED
        assert result.records == [{"characterName": "A"}]
        assert "direct" in result.failures

    def test_truncated_inside_string(self, decoder):
        text = '{"cast":[{"characterName":"A"},{"characterName":"B"},{"characterName":"C","notes":"half'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.REPAIRED
        assert names(result.records) == ["A", "B", "C"]

    def test_brackets_in_strings(self, decoder):
        text = '{"cast":[{"characterName":"A","note":"uses { and ] freely"},{"characterName":"B","note":"x'

        result = decoder.decode_with_report(text)

        assert names(result.records) == ["A", "B"]
        assert result.records[0]["note"] == "uses { and ] freely"


class TestSalvageTier:
    """Damaged responses give up their intact objects."""

    def test_record_missing_identity(self, decoder):
        text = '{"cast":[{"characterName":"A"},{"name":"X"},{"characterName":"B"}]}'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.SALVAGED
        assert names(result.records) == ["A", "B"]
        assert result.attempts == [DecodeTier.DIRECT, DecodeTier.REPAIRED, DecodeTier.SALVAGED]

    def test_broken_object_and_trailing_fragment(self, decoder):
        text = '{"cast":[{"characterName":"A"},{"oops"},{"characterName":"B","age":'

        result = decoder.decode_with_report(text)

        assert result.tier is DecodeTier.SALVAGED
        assert result.records == [{"characterName": "A"}, {"characterName": "B"}]


class TestNoRecords:
    """Responses with nothing recoverable raise."""

    def test_garbage(self, decoder):
        with pytest.raises(NoRecoverableRecordsError) as exc_info:
            decoder.decode("I'm sorry, I can't help with that.")

        assert exc_info.value.tiers_attempted == ["direct", "repaired", "salvaged"]
        assert exc_info.value.preview.startswith("I'm sorry")

    def test_empty_cast(self):
        with pytest.raises(NoRecoverableRecordsError):
            decode('{"cast": []}')

    def test_custom_fields(self):
        records = decode('{"items": [{"id": "x"}]}', id_field="id", array_key="items")

        assert records == [{"id": "x"}]


class TestLooksTruncated:
    @pytest.mark.parametrize("text,expected", [
        ('{"a": 1}', False),
        ('```json\n{"a": 1}\n```', False),
        ('{"a": 1', True),
        ('[{"a": 1},', True),
        ('{"a": "x}', True),
        ('', True),
    ])
    def test_looks_truncated(self, text, expected):
        assert looks_truncated(text) is expected
