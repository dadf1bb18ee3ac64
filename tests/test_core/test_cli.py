"""
Tests for the command-line entry point

Tests for showrunner/__main__.py
"""

import json

from showrunner.__main__ import main


class TestCli:
    """Tests for the parse, registry and decode subcommands."""

    def test_parse_scenes(self, temp_dir, sample_script, capsys):
        script = temp_dir / "episode.txt"
        script.write_text(sample_script, encoding="utf-8")

        assert main(["parse", str(script), "--scenes"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert len(output["scenes"]) == 2

    def test_registry(self, temp_dir, sample_script, sample_story_bible, sample_breakdown, capsys):
        script = temp_dir / "episode.txt"
        script.write_text(sample_script, encoding="utf-8")
        bible = temp_dir / "bible.json"
        bible.write_text(json.dumps({"characters": sample_story_bible}), encoding="utf-8")
        breakdown = temp_dir / "breakdown.json"
        breakdown.write_text(json.dumps(sample_breakdown), encoding="utf-8")

        code = main(["registry", str(script), "--bible", str(bible), "--breakdown", str(breakdown)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["batches"] == [["Jason Calacanis", "Maya Chen", "Officer Diaz"]]

    def test_decode_failure_exit_code(self, temp_dir, capsys):
        response = temp_dir / "response.txt"
        response.write_text("nothing useful", encoding="utf-8")

        assert main(["decode", str(response)]) == 1
        assert capsys.readouterr().out == ""
