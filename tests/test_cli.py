"""Tests for the command-line entry point."""

import json

from py_terra.cli import main


class TestCli:
    """Test world generation from the command line."""

    def test_json_summary(self, capsys):
        assert main(["--radius", "4", "--seed", "5", "--json"]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["seed"] == 5
        assert summary["tile_count"] == 61

    def test_text_summary(self, capsys):
        assert main(["--radius", "3", "--seed", "abc"]) == 0
        out = capsys.readouterr().out
        assert "Radius:     3 (37 tiles)" in out
        assert "PeakGenerator" in out

    def test_writes_tiles(self, tmp_path, capsys):
        output = tmp_path / "tiles.json"
        assert main(["--radius", "2", "--seed", "1", "--pipeline", "terrain", "--output", str(output)]) == 0

        tiles = json.loads(output.read_text())
        assert len(tiles) == 19
        assert {"q", "r", "s", "biome", "elevation", "water_level"} <= set(tiles[0])

    def test_invalid_radius(self, capsys):
        assert main(["--radius", "-2"]) == 2
        assert "Invalid settings" in capsys.readouterr().err
