"""Tests for the slotsort command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from slotsort._cli.config import SlotsortConfig, get_config
from slotsort._cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config lookup away from any pyproject.toml above the test tree."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def deps_file(tmp_path: Path) -> Path:
    path = tmp_path / "deps.txt"
    path.write_text("1 2\n2 3\n\n1 4\n")
    return path


class TestSortCommand:
    """Tests for `slotsort sort`."""

    def test_sort_file(self, deps_file: Path) -> None:
        result = runner.invoke(app, ["sort", str(deps_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["1", "4", "2", "3"]

    def test_sort_stdin(self) -> None:
        result = runner.invoke(app, ["sort"], input="a b c\n")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["a", "c", "b"]

    def test_names_are_printed_literally(self) -> None:
        result = runner.invoke(app, ["sort"], input="[bold] [x]\n")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["[bold]", "[x]"]

    def test_sort_to_output_file(self, deps_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "order.txt"
        result = runner.invoke(app, ["sort", str(deps_file), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text() == "1\n4\n2\n3\n"

    def test_cycle_exits_with_error(self) -> None:
        result = runner.invoke(app, ["sort"], input="a b\nb a\n")
        assert result.exit_code == 1
        assert "Cycle detected" in result.output
        assert "'a'" in result.output

    def test_missing_input_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["sort", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_input_and_output_from_config(self, tmp_path: Path, deps_file: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            f'[tool.slotsort]\ninput = "{deps_file.name}"\noutput = "order.txt"\n',
        )
        result = runner.invoke(app, ["sort"])
        assert result.exit_code == 0
        assert (tmp_path / "order.txt").read_text() == "1\n4\n2\n3\n"

    def test_invalid_config(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.slotsort]\ninput = 1\n")
        result = runner.invoke(app, ["sort"], input="a\n")
        assert result.exit_code == 1
        assert "expected string path" in result.output

    def test_stdout_matches_output_file_byte_for_byte(self, tmp_path: Path) -> None:
        text = "a\tb c\nx\x07y a\tb\n"
        output = tmp_path / "order.txt"

        printed = runner.invoke(app, ["sort"], input=text)
        written = runner.invoke(app, ["sort", "-o", str(output)], input=text)

        assert printed.exit_code == 0
        assert written.exit_code == 0
        assert printed.stdout == "x\x07y\na\tb\nc\n"
        assert output.read_text(encoding="utf-8") == printed.stdout

    def test_config_loaded_once_per_run(
        self,
        tmp_path: Path,
        deps_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text(
            f'[tool.slotsort]\ninput = "{deps_file.name}"\noutput = "order.txt"\n',
        )
        calls: list[SlotsortConfig] = []

        def counting_get_config() -> SlotsortConfig:
            config = get_config()
            calls.append(config)
            return config

        monkeypatch.setattr("slotsort._cli.main.get_config", counting_get_config)

        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 0
        assert len(calls) == 1
        assert (tmp_path / "order.txt").read_text() == "1\n4\n2\n3\n"

    def test_config_not_read_when_arguments_given(
        self,
        tmp_path: Path,
        deps_file: Path,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text("tool = 1\n")
        output = tmp_path / "order.txt"

        result = runner.invoke(app, ["sort", str(deps_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text() == "1\n4\n2\n3\n"

    def test_verbose_flag(self, deps_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "sort", str(deps_file)])
        assert result.exit_code == 0
        assert "1" in result.stdout


class TestCheckCommand:
    """Tests for `slotsort check`."""

    def test_acyclic(self, deps_file: Path) -> None:
        result = runner.invoke(app, ["check", str(deps_file)])
        assert result.exit_code == 0
        assert "Graph is acyclic" in result.output

    def test_cycle(self) -> None:
        result = runner.invoke(app, ["check"], input="x y\ny z\nz x\n")
        assert result.exit_code == 1
        assert "Cycle detected" in result.output


class TestGraphCommand:
    """Tests for `slotsort graph`."""

    def test_renders_every_node(self, deps_file: Path) -> None:
        result = runner.invoke(app, ["graph", str(deps_file)])
        assert result.exit_code == 0
        for name in ("1", "2", "3", "4"):
            assert name in result.stdout
        assert "4 nodes, 3 edges" in result.stdout
