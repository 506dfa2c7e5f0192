"""
Integration tests for the complete noirlint pipeline.

These tests run real Noir programs from disk through parsing, analysis,
lint rules and rendering, and drive the CLI against a Nargo package.
"""

import pytest

from noirlint.analysis import analyze, lint_file, parse_file
from noirlint.cli import EXIT_FAILURE, EXIT_OK, main
from noirlint.diagnostics import render
from noirlint.utils.errors import FileReadError, ParsingError

MERKLE_PROGRAM = """\
use dep::std::hash::pedersen_hash;

global DEPTH: u32 = 4;
global ZERO: Field = zero_leaf();

struct Proof {
    siblings: [Field; DEPTH],
    index: Field,
}

impl Proof {
    pub fn root(self, leaf: Field) -> Field {
        compute_root(leaf, self.index, self.siblings)
    }
}

fn zero_leaf() -> Field {
    0
}

fn hash_pair(left: Field, right: Field) -> Field {
    pedersen_hash([left, right])
}

fn compute_root<let N: u32>(leaf: Field, index: Field, siblings: [Field; N]) -> Field {
    let bits: [u1; N] = index.to_le_bits();
    let mut current = leaf;
    for i in 0..N {
        let (l, r) = if bits[i] == 1 {
            (siblings[i], current)
        } else {
            (current, siblings[i])
        };
        current = hash_pair(l, r);
    }
    current
}

fn legacy_hash(a: Field) -> Field {
    hash_pair(a, a)
}

pub(crate) fn debug_root(root: Field) {
    println!(root);
}

fn main(leaf: Field, root: pub Field, proof: Proof) {
    assert_eq(proof.root(leaf), root, "invalid proof");
}
"""


@pytest.fixture
def nargo_package(tmp_path):
    """Fixture that lays out a Nargo package containing the Merkle program."""
    (tmp_path / "Nargo.toml").write_text(
        '[package]\nname = "merkle"\ntype = "bin"\nauthors = [""]\n\n[dependencies]\n',
        encoding="utf-8",
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.nr").write_text(MERKLE_PROGRAM, encoding="utf-8")
    return tmp_path


class TestPipeline:
    """File to rendered report."""

    def test_unused_functions_found(self, nargo_package):
        path = nargo_package / "src" / "main.nr"
        lints = analyze(parse_file(path))

        assert [lint.description for lint in lints] == [
            "Function 'legacy_hash' is unused",
            "Function 'debug_root' is unused",
            "Function 'main' is unused",
        ]
        for lint in lints:
            name = lint.description.split("'")[1]
            assert MERKLE_PROGRAM.encode("utf-8")[lint.span.start : lint.span.end] == (
                name.encode("utf-8")
            )

    def test_rendered_report(self, nargo_package):
        path = nargo_package / "src" / "main.nr"
        report = render(lint_file(path), path)
        blocks = report.split("\n\n")

        assert len(blocks) == 3
        line = MERKLE_PROGRAM.splitlines().index("fn legacy_hash(a: Field) -> Field {") + 1
        assert blocks[0].splitlines() == [
            "warning[unused-function]: Function 'legacy_hash' is unused",
            f"  --> {path}:{line}:4",
            "   | fn legacy_hash(a: Field) -> Field {",
            "   |    ^",
        ]

    def test_syntax_error_in_file(self, write_source):
        path = write_source("fn ok() {}\nfn broken( {\n")
        with pytest.raises(ParsingError) as exc_info:
            parse_file(path)
        assert len(exc_info.value.errors) == 1

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(FileReadError):
            lint_file(tmp_path / "nope.nr")

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.nr"
        path.write_bytes(b"fn \xff() {}")
        with pytest.raises(FileReadError, match="UTF-8"):
            parse_file(path)


class TestCliOnPackage:
    """The CLI run against a Nargo package."""

    def test_manifest_path(self, nargo_package, capsys):
        code = main(["--manifest-path", str(nargo_package / "Nargo.toml"), "--no-color"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert out.count("warning[unused-function]") == 3
        assert out.rstrip().endswith("3 warning(s), 0 error(s)")

    def test_package_directory_as_working_directory(self, nargo_package, monkeypatch, capsys):
        monkeypatch.chdir(nargo_package)
        assert main(["--no-color"]) == EXIT_OK
        assert "Function 'legacy_hash' is unused" in capsys.readouterr().out

    def test_missing_entry_file(self, nargo_package, capsys):
        (nargo_package / "src" / "main.nr").unlink()
        assert main(["--manifest-path", str(nargo_package), "--no-color"]) == EXIT_FAILURE
        assert "error:" in capsys.readouterr().err
