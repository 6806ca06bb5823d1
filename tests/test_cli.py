"""Tests for the variantgroup command line interface."""

import pytest
import tempfile
import os

from variantgroup.__main__ import _main
from variantgroup.loader import clear_cache


@pytest.fixture
def config_file():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        f.write("classes:\n  button: ['text-(center red)', 'm-1']\n  input: 'outline-(~ 2)'\n")
        path = f.name
    yield path
    os.unlink(path)
    clear_cache()


class TestMain:
    """Tests for _main."""

    def test_lines(self, capsys):
        assert _main(["text-(center red)", "m-1"]) == 0
        assert capsys.readouterr().out == "text-center\ntext-red\nm-1\n"

    def test_join(self, capsys):
        assert _main(["--join", "outline-(~ 2)"]) == 0
        assert capsys.readouterr().out == "outline outline-2\n"

    def test_classes_dedupes(self, capsys):
        assert _main(["--classes", "text-(red sm)", "text-red"]) == 0
        assert capsys.readouterr().out == "text-red text-sm\n"

    def test_file(self, capsys):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
            f.write("border-(1 blue/30)\n")
            path = f.name
        try:
            assert _main(["--file", path]) == 0
        finally:
            os.unlink(path)
        assert capsys.readouterr().out == "border-1\nborder-blue/30\n"

    def test_missing_file(self, capsys):
        assert _main(["--file", "/nonexistent/tokens.txt"]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_config(self, capsys, config_file):
        assert _main(["--config", config_file]) == 0
        assert capsys.readouterr().out == "button: text-center text-red m-1\ninput: outline outline-2\n"

    def test_config_set(self, capsys, config_file):
        assert _main(["--config", config_file, "--set", "input"]) == 0
        assert capsys.readouterr().out == "input: outline outline-2\n"

    def test_config_unknown_set(self, capsys, config_file):
        assert _main(["--config", config_file, "--set", "nope"]) == 2
        assert "no class set" in capsys.readouterr().err

    def test_set_without_config(self):
        with pytest.raises(SystemExit):
            _main(["--set", "x", "a"])

    def test_no_tokens(self):
        with pytest.raises(SystemExit):
            _main([])

    def test_error_exit_code(self, capsys):
        assert _main(["m-1", "border-(1"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "error: UnbalancedGroup in token 1: unmatched '('",
            "  border-(1",
            "         ^",
        ]

    def test_tree(self, capsys):
        assert _main(["--tree", "a-(~ b)"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "a-(~ b)",
            "  GROUP 'a-' DASH @2",
            "    BARE",
            "    LIT  'b'",
        ]

    def test_selftest(self, capsys):
        assert _main(["--selftest"]) == 0
        assert "selftest: OK" in capsys.readouterr().out

    def test_tree_deep_nesting(self, capsys):
        assert _main(["--tree", "a-(" * 1100 + "b" + ")" * 1100]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1 + 1100 + 1
        assert lines[-1] == "  " * 1101 + "LIT  'b'"

    def test_no_partial_output_on_config_error(self, capsys):
        assert _main(["text-(center red)", "--config", "/nonexistent/classes.yml"]) == 2
        assert capsys.readouterr().out == ""

    def test_no_partial_output_on_set_error(self, capsys, config_file):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
            f.write("classes:\n  ok: 'm-1'\n  bad: 'p-()'\n")
            path = f.name
        try:
            assert _main(["text-(center red)", "--config", path]) == 1
        finally:
            os.unlink(path)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error: EmptyGroup in token 0")

    def test_tokens_and_config(self, capsys, config_file):
        assert _main(["m-(1 2)", "--config", config_file, "--set", "input"]) == 0
        assert capsys.readouterr().out == "m-1\nm-2\ninput: outline outline-2\n"
