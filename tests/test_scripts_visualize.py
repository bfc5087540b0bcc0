"""
Tests for the visualization command line.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import visualize

DATA_DIR = Path(__file__).parent.parent / "data"


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default options."""
        args = visualize.build_parser().parse_args([])
        assert args.config == "data/config.yaml"
        assert args.mode == "routes"
        assert args.output is None
        assert args.open is False

    def test_options(self):
        """Test explicit options."""
        args = visualize.build_parser().parse_args(
            ["--mode", "walks", "--zoom", "5", "--max-ticks", "20", "--style", "OpenStreetMap"]
        )
        assert args.mode == "walks"
        assert args.zoom == 5
        assert args.max_ticks == 20
        assert args.style == "OpenStreetMap"

    def test_bad_mode(self):
        """Test unknown modes are rejected."""
        with pytest.raises(SystemExit):
            visualize.build_parser().parse_args(["--mode", "spirals"])


class TestMain:
    """Tests for the main entry point."""

    def test_routes(self, tmp_path):
        """Test writing a route map from the sample data."""
        output = tmp_path / "routes.html"
        visualize.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--airports", str(DATA_DIR / "airports.csv"),
            "--flights", str(DATA_DIR / "flights.csv"),
            "--output", str(output),
            "--max-ticks", "5",
        ])
        assert output.exists()

    def test_walks(self, tmp_path):
        """Test writing a walk map from the sample grid."""
        output = tmp_path / "walks.html"
        grid = DATA_DIR / "grid"
        visualize.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--mode", "walks",
            "--airports", str(grid / "grid_locs.csv"),
            "--flights", str(grid / "flights.csv"),
            "--walks", str(grid / "walks.csv"),
            "--output", str(output),
            "--max-ticks", "5",
        ])
        assert output.exists()

    def test_missing_file(self, tmp_path, capsys):
        """Test missing data exits with an error."""
        with pytest.raises(SystemExit) as exc:
            visualize.main([
                "--config", str(tmp_path / "missing.yaml"),
                "--airports", str(tmp_path / "none.csv"),
                "--output", str(tmp_path / "routes.html"),
            ])
        assert exc.value.code == 1
        assert "Data file not found" in capsys.readouterr().out
