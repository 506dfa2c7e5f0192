"""
Tests for the noirlint command-line interface.
"""

import pytest

from noirlint.cli import EXIT_FAILURE, EXIT_OK, create_parser, main


@pytest.fixture
def nargo_project(tmp_path):
    """Fixture that creates a package with a Nargo.toml and an entry file."""

    def _create(source: str, entry: str = "src/main.nr"):
        (tmp_path / "Nargo.toml").write_text(
            f'[package]\nname = "demo"\ntype = "bin"\nentry = "{entry}"\n',
            encoding="utf-8",
        )
        entry_path = tmp_path / entry
        entry_path.parent.mkdir(parents=True, exist_ok=True)
        entry_path.write_text(source, encoding="utf-8")
        return tmp_path

    return _create


class TestCliArguments:
    """Argument parsing."""

    def test_file_and_manifest_are_exclusive(self):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["main.nr", "--manifest-path", "Nargo.toml"])
        assert exc_info.value.code == 2

    def test_rule_is_repeatable(self):
        args = create_parser().parse_args(["--rule", "a", "--rule", "b"])
        assert args.rule == ["a", "b"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "noirlint" in capsys.readouterr().out


class TestCliLinting:
    """Linting through the CLI."""

    def test_clean_file(self, write_source, capsys):
        path = write_source("pub fn main() {}\n")
        assert main([str(path), "--no-color"]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.strip() == "No lints found"

    def test_warnings_exit_zero(self, write_source, capsys):
        path = write_source("fn helper() {}\npub fn main() {}\n")
        assert main([str(path), "--no-color"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "warning[unused-function]: Function 'helper' is unused" in out
        assert f"{path}:1:4" in out
        assert "1 warning(s), 0 error(s)" in out

    def test_manifest_entry_point(self, nargo_project, capsys):
        root = nargo_project("fn unused() {}\n", entry="src/lib.nr")
        code = main(["--manifest-path", str(root / "Nargo.toml"), "--no-color"])
        assert code == EXIT_OK
        assert "Function 'unused' is unused" in capsys.readouterr().out

    def test_default_manifest_in_working_directory(self, nargo_project, monkeypatch, capsys):
        root = nargo_project("pub fn main() {}\n")
        monkeypatch.chdir(root)
        assert main(["--no-color"]) == EXIT_OK
        assert "No lints found" in capsys.readouterr().out

    def test_selected_rule(self, write_source, capsys):
        path = write_source("fn helper() {}\n")
        assert main([str(path), "--rule", "unused-function", "--no-color"]) == EXIT_OK
        assert "helper" in capsys.readouterr().out

    def test_list_rules(self, capsys):
        assert main(["--list-rules", "--no-color"]) == EXIT_OK
        assert "unused-function" in capsys.readouterr().out


class TestCliFailures:
    """Failures are reported on stderr with exit code 2."""

    def test_parse_error(self, write_source, capsys):
        path = write_source("fn main() {\n    let x = ;\n}\n")
        assert main([str(path), "--no-color"]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert f"{path}:2:13: error:" in err
        assert "Parsing failed with 1 error" in err

    def test_parse_error_in_manifest_entry(self, nargo_project, capsys):
        """Syntax errors are located in the entry file the manifest names."""
        root = nargo_project("fn main() {\n    let = 1;\n}\n")
        code = main(["--manifest-path", str(root), "--no-color"])
        assert code == EXIT_FAILURE
        err = capsys.readouterr().err
        assert f"{root / 'src' / 'main.nr'}:2:9: error:" in err

    def test_missing_file(self, tmp_path, capsys):
        path = tmp_path / "missing.nr"
        assert main([str(path), "--no-color"]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert "Opening" in err
        assert "missing.nr" in err

    def test_unknown_rule(self, write_source, capsys):
        path = write_source("pub fn main() {}\n")
        assert main([str(path), "--rule", "bogus", "--no-color"]) == EXIT_FAILURE
        assert "Unknown lint rule 'bogus'" in capsys.readouterr().err

    def test_invalid_manifest(self, tmp_path, capsys):
        manifest = tmp_path / "Nargo.toml"
        manifest.write_text('[package]\nname = "x"\ntype = "app"\n', encoding="utf-8")
        assert main(["--manifest-path", str(manifest), "--no-color"]) == EXIT_FAILURE
        assert "Invalid package type" in capsys.readouterr().err
