"""
Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Any, List

from showrunner.screenplay import assemble


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Sample configuration for testing."""
    return {
        "app_name": "Showrunner",
        "version": "1.0.0",
        "verbose_logging": True,
        "screenplay": {
            "page_element_limit": 40,
            "max_cue_length": 30,
            "cue_lookahead": 3
        },
        "resolution": {
            "min_merge_key_length": 3,
            "require_word_boundary": True
        },
        "casting": {
            "batch_size": 4,
            "tokens_per_character": 1500
        }
    }


@pytest.fixture
def sample_script() -> str:
    """Two-scene screenplay with markup, a transition and a parenthetical."""
    return (
        "**FADE IN:**\n"
        "\n"
        "INT. OFFICE - DAY\n"
        "\n"
        "JASON CALACANIS (50s) paces behind his desk.\n"
        "\n"
        "JASON\n"
        "Hello there.\n"
        "\n"
        "MAYA\n"
        "(quietly)\n"
        "We need to talk.\n"
        "\n"
        "CUT TO:\n"
        "\n"
        "EXT. PARKING LOT - NIGHT\n"
        "\n"
        "JASON CALACANIS\n"
        "I said no.\n"
        "\n"
        "MAYA\n"
        "Then we're done.\n"
    )


@pytest.fixture
def sample_document(sample_script):
    """The sample script, assembled."""
    return assemble(sample_script, title="Pilot", episode_number=1)


@pytest.fixture
def sample_story_bible() -> List[Dict[str, Any]]:
    """Story bible characters, loosely typed as they arrive from generation."""
    return [
        {"name": "Jason Calacanis", "role": "protagonist", "age": "50s"},
        {"name": "Maya Chen", "importance": "supporting", "description": "Jason's co-founder"},
        {"name": "Officer Diaz", "role": "minor"},
    ]


@pytest.fixture
def sample_breakdown() -> List[Dict[str, Any]]:
    """Scene breakdown, including a character the story bible never names."""
    return [
        {
            "sceneNumber": 1,
            "sceneTitle": "The Office",
            "characters": [
                {"name": "JASON", "lineCount": 1, "importance": "lead"},
                {"name": "MAYA CHEN", "lineCount": 1},
            ]
        },
        {
            "sceneNumber": 2,
            "sceneTitle": "Parking Lot",
            "characters": [
                {"name": "Jason Calacanis", "lineCount": 1},
                {"name": "MAYA CHEN", "lineCount": 1},
                {"name": "GHOST", "lineCount": 3},
            ]
        },
    ]


@pytest.fixture
def cast_response() -> str:
    """A well-formed batched casting response, fenced the way models often return it."""
    return """```json
{
  "cast": [
    {
      "characterName": "Jason Calacanis",
      "archetype": "The Reluctant Hero",
      "ageRange": {"min": 48, "max": 58},
      "physicalRequirements": {"build": "average"},
      "performanceRequirements": {
        "actingStyle": "grounded",
        "emotionalRange": "bluster to vulnerability",
        "specialSkills": ["fast talker"]
      },
      "actorTemplates": [{"name": "Bob Odenkirk", "whyMatch": "Fast, wry delivery"}],
      "castingNotes": "Local actor preferred",
      "priority": "lead",
      "backstory": "Serial founder"
    },
    {
      "characterName": "Maya Chen",
      "archetype": "The Ally"
    }
  ]
}
```"""
