# SPDX-License-Identifier: MIT
"""Tests for vsccc CLI."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from vsccc.cli import main, normalize_args, setup_logging
from vsccc.core.errors import (
    MissingMacroError,
    OutputError,
    ProjectLoadError,
    UnsupportedConditionError,
    UsageError,
)

PROJECT = """<Project>
  <PropertyGroup><Src>src</Src></PropertyGroup>
  <ItemDefinitionGroup Condition="'$(Configuration)'=='Release'">
    <ClCompile><PreprocessorDefinitions>NDEBUG</PreprocessorDefinitions></ClCompile>
  </ItemDefinitionGroup>
  <ItemGroup><ClCompile Include="$(Src)\\main.cpp" /></ItemGroup>
</Project>
"""


def write_app(directory: Path, body: str = PROJECT) -> Path:
    path = directory / "app.vcxproj"
    path.write_text(body)
    return path


def read_commands(directory: Path) -> list[dict]:
    return json.loads((directory / "compile_commands.json").read_text())


class TestNormalizeArgs:
    """Tests for MSBuild-style option rewriting."""

    def test_msbuild_spellings(self) -> None:
        """Test -p:, --property: and /p: forms."""
        args = ["-p:A=1", "--property:B=2", "/p:C=3", "-P:D=4"]
        assert normalize_args(args) == [
            "--property", "A=1",
            "--property", "B=2",
            "--property", "C=3",
            "--property", "D=4",
        ]

    def test_other_args_untouched(self) -> None:
        """Test that paths and ordinary options pass through."""
        args = ["-v", "--property", "A=1", "app.vcxproj"]
        assert normalize_args(args) == args


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_normal(self) -> None:
        """Test normal logging setup."""
        # Just ensure it doesn't crash
        setup_logging(verbose=False, debug=False)

    def test_setup_logging_verbose(self) -> None:
        """Test verbose logging setup."""
        setup_logging(verbose=True, debug=False)

    def test_setup_logging_debug(self) -> None:
        """Test debug logging setup."""
        setup_logging(verbose=False, debug=True)


class TestMain:
    """Tests for main() called in-process."""

    def test_generates_for_project(self, tmp_path: Path) -> None:
        """Test writing compile_commands.json next to the project."""
        write_app(tmp_path)
        assert main([str(tmp_path / "app.vcxproj")]) == 0
        (entry,) = read_commands(tmp_path)
        assert entry["file"] == "src/main.cpp"
        assert "-DNDEBUG" not in entry["command"]

    def test_property_option(self, tmp_path: Path) -> None:
        """Test that -p:Configuration=Release reaches conditions."""
        write_app(tmp_path)
        assert main(["-p:Configuration=Release", str(tmp_path)]) == 0
        (entry,) = read_commands(tmp_path)
        assert "-DNDEBUG" in entry["command"]

    def test_output_dir(self, tmp_path: Path) -> None:
        """Test --output-dir."""
        write_app(tmp_path)
        out = tmp_path / "out"
        assert main(["-o", str(out), str(tmp_path)]) == 0
        assert (out / "compile_commands.json").exists()
        assert not (tmp_path / "compile_commands.json").exists()

    def test_verbose(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test that --verbose logs macros and items."""
        write_app(tmp_path)
        caplog.set_level("INFO", logger="vsccc")
        assert main(["--verbose", str(tmp_path)]) == 0
        assert "Src: src" in caplog.text
        assert "ClCompile:" in caplog.text

    @pytest.mark.parametrize(
        ("body", "error"),
        [
            ("<Project", ProjectLoadError),
            (
                '<Project><ItemGroup><ClCompile Include="$(Nope).cpp" /></ItemGroup></Project>',
                MissingMacroError,
            ),
            (
                "<Project><PropertyGroup Condition=\"Exists('x')\" /></Project>",
                UnsupportedConditionError,
            ),
        ],
    )
    def test_error_exit_codes(self, tmp_path: Path, body: str, error: type) -> None:
        """Test that each error category has its own exit status."""
        write_app(tmp_path, body)
        assert main([str(tmp_path)]) == error.exit_code
        assert not (tmp_path / "compile_commands.json").exists()

    def test_solution_not_utf8(self, tmp_path: Path) -> None:
        """Test that an undecodable solution is a load error, not a crash."""
        write_app(tmp_path)
        sln = tmp_path / "app.sln"
        sln.write_bytes(
            'Project("{8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942}") = "caf\u00e9", '
            '"app.vcxproj", "{00000000-0000-0000-0000-000000000000}"\n'.encode("cp1252")
        )
        assert main([str(sln)]) == ProjectLoadError.exit_code

    def test_unwritable_output_dir(self, tmp_path: Path) -> None:
        """Test that a failed write reports an output error."""
        project = write_app(tmp_path)
        blocker = tmp_path / "out"
        blocker.write_text("")
        assert main(["-o", str(blocker), str(project)]) == OutputError.exit_code

    def test_invalid_property(self, tmp_path: Path) -> None:
        """Test a malformed property string."""
        write_app(tmp_path)
        assert main(["-p", "Configuration", str(tmp_path)]) == UsageError.exit_code

    def test_exit_codes_distinct(self) -> None:
        """Test that error categories are distinguishable."""
        codes = {
            UsageError.exit_code,
            ProjectLoadError.exit_code,
            MissingMacroError.exit_code,
            UnsupportedConditionError.exit_code,
            OutputError.exit_code,
        }
        assert len(codes) == 5
        assert 0 not in codes


class TestCLICommands:
    """Tests for the CLI run as a subprocess."""

    def test_vsccc_help(self) -> None:
        """Test vsccc --help."""
        result = subprocess.run(
            [sys.executable, "-m", "vsccc.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "vsccc" in result.stdout
        assert "--property" in result.stdout

    def test_vsccc_version(self) -> None:
        """Test vsccc --version."""
        result = subprocess.run(
            [sys.executable, "-m", "vsccc.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "0.1.0" in result.stdout

    def test_vsccc_in_current_directory(self, tmp_path: Path) -> None:
        """Test running without a path."""
        write_app(tmp_path)
        result = subprocess.run(
            [sys.executable, "-m", "vsccc.cli"],
            capture_output=True,
            text=True,
            cwd=tmp_path,
        )
        assert result.returncode == 0
        assert len(read_commands(tmp_path)) == 1

    def test_vsccc_error_message(self, tmp_path: Path) -> None:
        """Test that failures print the offending file and fail."""
        result = subprocess.run(
            [sys.executable, "-m", "vsccc.cli", str(tmp_path)],
            capture_output=True,
            text=True,
        )
        assert result.returncode == ProjectLoadError.exit_code
        assert "no projects found" in result.stderr
