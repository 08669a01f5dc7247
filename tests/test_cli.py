# tests/test_cli.py
"""End-to-end tests for the amalgo command line."""

import pytest
from pathlib import Path
from click.testing import CliRunner

from amalgo import __version__
from amalgo.cli.interface import main_cli


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("amalgo.config.loader.USER_CONFIG_FILE", tmp_path / "no-user-config.toml")


def _write_go_project(proj_dir: Path):
    (proj_dir / "main.go").write_text("package main\n")
    (proj_dir / "util.go").write_text("package util\n")
    (proj_dir / "README.md").write_text("# README\n")
    (proj_dir / "test.txt").write_text("text file\n")


def test_cli_writes_default_output_file():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)

        result = runner.invoke(main_cli, ["-e", ".go"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Wrote 2 file(s) to concat.md" in result.output
        output = (proj_dir / "concat.md").read_text()
        assert "# main.go" in output
        assert "# util.go" in output
        assert "README.md" not in output


def test_cli_stdout_output():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _write_go_project(Path(td))

        result = runner.invoke(main_cli, ["--ext", "go", "--out", "-"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "# main.go\n```go\npackage main\n```" in result.output
        assert not (Path(td) / "concat.md").exists()


def test_cli_scans_given_directory(tmp_path: Path):
    proj_dir = tmp_path / "proj"
    (proj_dir / "pkg").mkdir(parents=True)
    (proj_dir / "pkg" / "lib.rs").write_text("fn main() {}\n")
    out_file = tmp_path / "out.md"

    result = CliRunner().invoke(
        main_cli, ["-d", str(proj_dir), "-e", ".rs", "-o", str(out_file), "-l", "3"], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert out_file.read_text().startswith("### pkg/lib.rs\n```rust\n")


def test_cli_requires_extensions():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _write_go_project(Path(td))

        result = runner.invoke(main_cli, [])

        assert result.exit_code == 1
        assert "no valid extensions" in result.output
        assert not (Path(td) / "concat.md").exists()


def test_cli_rejects_malformed_extension():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(main_cli, ["-e", ".tar.gz"])
        assert result.exit_code == 1
        assert "invalid extension" in result.output


def test_cli_no_matching_files():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _write_go_project(Path(td))

        result = runner.invoke(main_cli, ["-e", ".nonexistent", "-o", "empty.md"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "No files found matching criteria" in result.output
        assert not (Path(td) / "empty.md").exists()


def test_cli_uses_root_gitignore():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)
        (proj_dir / ".gitignore").write_text("util.go\n")

        result = runner.invoke(main_cli, ["-e", ".go", "-o", "-"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Using .gitignore" in result.output
        assert "# main.go" in result.output
        assert "# util.go" not in result.output

        result = runner.invoke(main_cli, ["-e", ".go", "-o", "-", "--no-use-gitignore"], catch_exceptions=False)
        assert "# util.go" in result.output


def test_cli_ignore_patterns_and_dirs():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)
        (proj_dir / "main_test.go").write_text("package main\n")
        (proj_dir / "third_party").mkdir()
        (proj_dir / "third_party" / "dep.go").write_text("package dep\n")

        result = runner.invoke(
            main_cli, ["-e", ".go", "-p", "*_test.go", "-i", "third_party", "-o", "-"], catch_exceptions=False
        )

        assert result.exit_code == 0
        assert "# main.go" in result.output
        assert "main_test.go" not in result.output
        assert "third_party" not in result.output


def test_cli_ignore_pattern_values_are_comma_separated():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)
        (proj_dir / "main_test.go").write_text("package main\n")

        result = runner.invoke(
            main_cli, ["-e", ".go", "-p", "*_test.go, util.go", "-o", "-"], catch_exceptions=False
        )

        assert result.exit_code == 0
        assert "# main.go" in result.output
        assert "main_test.go" not in result.output
        assert "util.go" not in result.output


def test_cli_degenerate_ignore_pattern_is_skipped():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)
        (proj_dir / ".gitignore").write_text("!\nutil.go\n")

        result = runner.invoke(main_cli, ["-e", ".go", "-p", "!", "-o", "-"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "# main.go" in result.output
        assert "util.go" not in result.output


def test_cli_hidden_files():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        (Path(td) / ".env").write_text("KEY=value\n")

        result = runner.invoke(main_cli, ["-e", ".env", "-o", "-"], catch_exceptions=False)
        assert "No files found matching criteria" in result.output

        result = runner.invoke(main_cli, ["-e", ".env", "--include-hidden", "-o", "-"], catch_exceptions=False)
        assert "# .env" in result.output
        assert "KEY=value" in result.output


def test_cli_xml_format():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _write_go_project(Path(td))

        result = runner.invoke(main_cli, ["-e", ".go", "-f", "xml"], catch_exceptions=False)

        assert result.exit_code == 0
        output = (Path(td) / "concat.xml").read_text()
        assert '<file path="main.go" language="go">' in output


def test_cli_invalid_format_is_a_usage_error():
    result = CliRunner().invoke(main_cli, ["-e", ".go", "-f", "nonexistent"])
    assert result.exit_code == 2


def test_cli_config_profile():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        proj_dir = Path(td)
        _write_go_project(proj_dir)
        (proj_dir / ".amalgo.toml").write_text(
            'extensions = [".go"]\n'
            'output = "-"\n'
            '\n'
            '[profiles.docs]\n'
            'extensions = [".md"]\n'
        )

        result = runner.invoke(main_cli, [], catch_exceptions=False)
        assert result.exit_code == 0
        assert "# main.go" in result.output
        assert "README" not in result.output

        result = runner.invoke(main_cli, ["--config-profile", "docs"], catch_exceptions=False)
        assert "# README.md" in result.output
        assert "# main.go" not in result.output

        result = runner.invoke(main_cli, ["--config-profile", "docs", "-e", ".txt"], catch_exceptions=False)
        assert "# test.txt" in result.output
        assert "# README.md" not in result.output


def test_cli_version():
    result = CliRunner().invoke(main_cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
