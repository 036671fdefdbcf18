"""End-to-end tests for the command line interface.

Writes small geometry files, runs the CLI commands on them and checks
exit codes, printed areas and written result files.
"""

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polyoverlay import __version__
from polyoverlay.cli import app

runner = CliRunner()


def square(x0: float, y0: float, size: float = 1.0) -> dict:
    return {
        "shell": [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size]],
    }


@pytest.fixture(autouse=True)
def drop_console_handlers() -> Generator[None, None, None]:
    """Remove log handlers installed by CLI runs, which outlive the captured streams."""
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in root.handlers[:]:
        if handler in before:
            continue
        if type(handler) is logging.StreamHandler or isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def geometry_files(tmp_path: Path) -> tuple[Path, Path]:
    """Two offset unit squares as geometry files."""
    a = tmp_path / "a.json"
    b = tmp_path / "b.json"
    a.write_text(json.dumps({"polygons": [square(0, 0)]}), encoding="utf-8")
    b.write_text(json.dumps(square(0.5, 0.5)), encoding="utf-8")
    return a, b


@pytest.fixture
def invalid_file(tmp_path: Path) -> Path:
    """A geometry whose member polygons overlap."""
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps({"polygons": [square(0, 0, 2), square(1, 1, 2)]}), encoding="utf-8")
    return path


class TestVersion:
    """Test the global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestAreaCommand:
    """Test the area command."""

    def test_single_geometry_area(self, geometry_files: tuple[Path, Path]) -> None:
        """With one input the geometry's own area is printed."""
        result = runner.invoke(app, ["area", str(geometry_files[0]), "-q"])
        assert result.exit_code == 0, result.output
        assert float(result.output.strip()) == pytest.approx(1.0)

    def test_intersection_area(self, geometry_files: tuple[Path, Path]) -> None:
        """Intersection is the default operation."""
        a, b = geometry_files
        result = runner.invoke(app, ["area", str(a), str(b), "-q"])
        assert result.exit_code == 0, result.output
        assert float(result.output.strip()) == pytest.approx(0.25)

    @pytest.mark.parametrize(
        ("op", "expected"),
        [("union", 1.75), ("difference", 0.75), ("SymDifference", 1.5)],
    )
    def test_operations(self, geometry_files: tuple[Path, Path], op: str, expected: float) -> None:
        """Operations are selected by case-insensitive name."""
        a, b = geometry_files
        result = runner.invoke(app, ["area", str(a), str(b), "--op", op, "-q"])
        assert result.exit_code == 0, result.output
        assert float(result.output.strip()) == pytest.approx(expected)

    def test_verified_area(self, geometry_files: tuple[Path, Path]) -> None:
        """--verify cross-checks against the linked rings."""
        a, b = geometry_files
        result = runner.invoke(app, ["area", str(a), str(b), "--verify", "-q"])
        assert result.exit_code == 0, result.output
        assert float(result.output.strip()) == pytest.approx(0.25)

    def test_verbose_output(self, geometry_files: tuple[Path, Path]) -> None:
        """Without -q the header and a labelled area are shown."""
        a, b = geometry_files
        result = runner.invoke(app, ["area", str(a), str(b)])
        assert result.exit_code == 0, result.output
        assert "polyoverlay" in result.output
        assert "Intersection area" in result.output

    def test_log_file(self, geometry_files: tuple[Path, Path], tmp_path: Path) -> None:
        """Stage logs go to the requested file."""
        a, b = geometry_files
        log_file = tmp_path / "overlay.log"
        result = runner.invoke(
            app, ["area", str(a), str(b), "-q", "--log-file", str(log_file)]
        )
        assert result.exit_code == 0, result.output
        assert "Overlay area computed" in log_file.read_text(encoding="utf-8")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing input exits with an error."""
        result = runner.invoke(app, ["area", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Unreadable JSON exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["area", str(path)])
        assert result.exit_code == 1
        assert "Could not read geometry" in result.output

    def test_topology_failure(self, invalid_file: Path, geometry_files: tuple[Path, Path]) -> None:
        """Invalid input topology is reported, not turned into an area."""
        result = runner.invoke(app, ["area", str(invalid_file), str(geometry_files[0])])
        assert result.exit_code == 1
        assert "Overlay failed due to invalid/degenerate input topology" in result.output


class TestOverlayCommand:
    """Test the overlay command."""

    def test_output_file(self, geometry_files: tuple[Path, Path], tmp_path: Path) -> None:
        """Result rings are written as JSON."""
        a, b = geometry_files
        output = tmp_path / "result.json"
        result = runner.invoke(app, ["overlay", str(a), str(b), "-o", str(output)])
        assert result.exit_code == 0, result.output

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["operation"] == "intersection"
        assert data["area"] == pytest.approx(0.25)
        assert len(data["rings"]) == 1
        assert len(data["rings"][0]) == 5

    def test_quiet_prints_json(self, geometry_files: tuple[Path, Path]) -> None:
        """In quiet mode without -o the JSON goes to stdout."""
        a, b = geometry_files
        result = runner.invoke(app, ["overlay", str(a), str(b), "--op", "union", "-q"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["operation"] == "union"
        assert data["area"] == pytest.approx(1.75)

    def test_topology_failure(self, invalid_file: Path, geometry_files: tuple[Path, Path]) -> None:
        """Invalid input topology exits with an error."""
        result = runner.invoke(app, ["overlay", str(invalid_file), str(geometry_files[0])])
        assert result.exit_code == 1
        assert "Overlay failed" in result.output


class TestBatchCommand:
    """Test the batch command."""

    def test_batch(self, tmp_path: Path) -> None:
        """Every pair's area is listed."""
        pairs_file = tmp_path / "pairs.json"
        pairs = [
            {"name": "offset", "a": square(0, 0), "b": square(0.5, 0.5)},
            {"name": "same", "a": square(0, 0), "b": square(0, 0)},
        ]
        pairs_file.write_text(json.dumps({"pairs": pairs}), encoding="utf-8")

        result = runner.invoke(app, ["batch", str(pairs_file), "--workers", "1", "-q"])
        assert result.exit_code == 0, result.output
        assert "offset" in result.output
        assert "0.25" in result.output
        assert "same" in result.output

    def test_batch_with_failure(self, tmp_path: Path) -> None:
        """A failing pair makes the batch exit with an error."""
        pairs_file = tmp_path / "pairs.json"
        pairs = [
            {"name": "offset", "a": square(0, 0), "b": square(0.5, 0.5)},
            {"name": "broken", "a": {"rings": []}, "b": square(0, 0)},
        ]
        pairs_file.write_text(json.dumps(pairs), encoding="utf-8")

        result = runner.invoke(app, ["batch", str(pairs_file), "--workers", "1", "-q"])
        assert result.exit_code == 1
        assert "broken" in result.output

    def test_missing_pairs_file(self, tmp_path: Path) -> None:
        """A missing pairs file exits with an error."""
        result = runner.invoke(app, ["batch", str(tmp_path / "none.json")])
        assert result.exit_code == 1
