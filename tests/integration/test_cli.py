"""Integration tests for the tplrender command line."""

from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from tplrender.cli.app import app

runner = CliRunner()

WriteFile = Callable[[str, str], Path]


class TestRenderCommand:
    """Tests for the render command."""

    def test_renders_to_stdout_by_default(
        self, workdir: Path, write_file: WriteFile
    ) -> None:
        """Test --set values rendered to standard output."""
        write_file("a.tpl", "Hello {{ Name }}")

        result = runner.invoke(app, ["--set", "Name=World", "a.tpl"])

        assert result.exit_code == 0, result.output
        assert "Hello World" in result.stdout

    def test_mirrors_tree(
        self, templates_tree: Path, write_file: WriteFile
    ) -> None:
        """Test rendering a tree with values files and overrides."""
        values = write_file("values.yaml", "name: from-file\n")

        result = runner.invoke(
            app,
            ["-f", str(values), "-s", "name=override", "-o", "out/", "templates"],
        )

        assert result.exit_code == 0, result.output
        assert Path("out/templates/ok.txt").read_text() == "top override"
        assert Path("out/templates/deep/ok2.txt").read_text() == "deep override"

    def test_preload_option(self, workdir: Path, write_file: WriteFile) -> None:
        """Test --preload fragments."""
        write_file("lib.tpl", "{% macro hi() %}hi{% endmacro %}")
        write_file("t.txt.tmpl", "{{ hi() }}")

        result = runner.invoke(app, ["-p", "lib.tpl", "-o", "out/", "t.txt.tmpl"])

        assert result.exit_code == 0, result.output
        assert Path("out/t.txt").read_text() == "hi"

    @pytest.mark.parametrize(
        "flags", [["--stop-on-error"], ["--missing-key", "error"]]
    )
    def test_strict_mode_fails(
        self, workdir: Path, write_file: WriteFile, flags: list[str]
    ) -> None:
        """Test that strict missing keys exit with status 1."""
        write_file("a.tpl", "{{ missing }}")

        result = runner.invoke(app, [*flags, "-o", "out.txt", "a.tpl"])

        assert result.exit_code == 1

    def test_lenient_by_default(self, workdir: Path, write_file: WriteFile) -> None:
        """Test that missing keys render empty without flags."""
        write_file("a.tpl", "[{{ missing }}]")

        result = runner.invoke(app, ["-o", "out.txt", "a.tpl"])

        assert result.exit_code == 0, result.output
        assert Path("out.txt").read_text() == "[]"

    def test_missing_key_from_settings(
        self, workdir: Path, write_file: WriteFile, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test TPLRENDER_MISSING_KEY as the default policy."""
        monkeypatch.setenv("TPLRENDER_MISSING_KEY", "error")
        write_file("a.tpl", "{{ missing }}")

        result = runner.invoke(app, ["-o", "out.txt", "a.tpl"])

        assert result.exit_code == 1

    def test_output_from_settings(
        self, workdir: Path, write_file: WriteFile, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test TPLRENDER_OUTPUT as the default target."""
        monkeypatch.setenv("TPLRENDER_OUTPUT", "rendered/")
        write_file("a.txt.tpl", "x")

        result = runner.invoke(app, ["a.txt.tpl"])

        assert result.exit_code == 0, result.output
        assert Path("rendered/a.txt").read_text() == "x"

    def test_conflicting_policy_flags(self, workdir: Path, write_file: WriteFile) -> None:
        """Test that --stop-on-error and zero-value cannot be combined."""
        write_file("a.tpl", "x")

        result = runner.invoke(
            app, ["--stop-on-error", "--missing-key", "zero-value", "a.tpl"]
        )

        assert result.exit_code != 0

    def test_bad_override_is_usage_error(
        self, workdir: Path, write_file: WriteFile
    ) -> None:
        """Test that malformed --set values are rejected."""
        write_file("a.tpl", "x")

        result = runner.invoke(app, ["--set", "novalue", "a.tpl"])

        assert result.exit_code == 2

    def test_missing_input(self, workdir: Path) -> None:
        """Test that a missing input exits with status 1."""
        result = runner.invoke(app, ["-o", "out/", "nope.tpl"])

        assert result.exit_code == 1

    def test_env_option(
        self, workdir: Path, write_file: WriteFile, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test exposing environment variables with --env."""
        monkeypatch.setenv("TPLRENDER_GREETING", "hola")
        write_file("a.tpl", "{{ env.TPLRENDER_GREETING }}")

        result = runner.invoke(app, ["--env", "-o", "out.txt", "a.tpl"])

        assert result.exit_code == 0, result.output
        assert Path("out.txt").read_text() == "hola"
