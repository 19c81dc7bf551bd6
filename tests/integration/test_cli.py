"""
Integration tests - Command Line Interface

Runs main.main() with argv lists and checks exit codes and output:
- generate (preset, spec file, --validate)
- permutations
- analyze
- Error handling and the missing-command case
"""
import json

import pytest

from main import main


@pytest.fixture
def spec_file(tmp_path):
    """Write a JSON spec patch to disk and return its path."""
    def _write(content):
        path = tmp_path / "spec.json"
        path.write_text(content if isinstance(content, str) else json.dumps(content))
        return str(path)
    return _write


# =============================================================================
# GENERATE
# =============================================================================

class TestGenerate:
    """The generate command."""

    def test_preset_tree(self, capsys):
        code = main(["generate", "--preset", "tree", "--nodes", "5", "--seed", "1"])
        graph = json.loads(capsys.readouterr().out)

        assert code == 0
        assert len(graph["nodes"]) == 5
        assert len(graph["edges"]) == 4
        assert graph["spec"]["cycles"]["kind"] == "acyclic"

    def test_same_seed_same_output(self, capsys):
        main(["generate", "--preset", "dag", "--nodes", "8", "--seed", "3"])
        first = capsys.readouterr().out
        main(["generate", "--preset", "dag", "--nodes", "8", "--seed", "3"])

        assert capsys.readouterr().out == first

    def test_validate(self, capsys):
        """
        --validate wraps the graph with its validation result.

        Verifies:
        - Exit code 0 for a valid graph
        - Output has graph and validation keys
        """
        code = main(["generate", "--preset", "tree", "--nodes", "6", "--seed", "2", "--validate"])
        output = json.loads(capsys.readouterr().out)

        assert code == 0
        assert output["validation"]["valid"] is True
        assert len(output["graph"]["edges"]) == 5

    def test_spec_file(self, capsys, spec_file):
        path = spec_file({"specific_regular": {"kind": "k_regular", "k": 3}})

        code = main(["generate", "--spec", path, "--nodes", "8", "--seed", "4"])
        graph = json.loads(capsys.readouterr().out)

        assert code == 0
        assert len(graph["edges"]) == 12

    def test_infeasible_spec(self, capsys, spec_file):
        path = spec_file({"specific_regular": {"kind": "k_regular", "k": 5}})

        code = main(["generate", "--spec", path, "--nodes", "3"])

        assert code == 1
        assert "Error: k-regular graph requires k < n" in capsys.readouterr().err


# =============================================================================
# PERMUTATIONS AND ANALYZE
# =============================================================================

def test_permutations(capsys):
    code = main(["permutations"])
    lines = capsys.readouterr().out.splitlines()

    assert code == 0
    assert lines[0] == "432 valid core permutations"
    assert len(lines) == 433


class TestAnalyze:
    """The analyze command."""

    def test_clean_preset(self, capsys):
        code = main(["analyze", "--preset", "tree"])
        out = capsys.readouterr().out

        assert code == 0
        assert "No diagnostics" in out

    def test_error_diagnostic(self, capsys, spec_file):
        path = spec_file({"specific_regular": {"kind": "k_regular", "k": 3}})

        code = main(["analyze", "--spec", path, "--nodes", "5"])
        out = capsys.readouterr().out

        assert code == 1
        assert "[ERROR  ] specific_regular: No 3-regular graph exists on 5 vertices" in out

    def test_contradictory_core_axes(self, capsys, spec_file):
        path = spec_file({"cycles": "acyclic", "self_loops": "allowed"})

        assert main(["analyze", "--spec", path]) == 1
        assert "ERROR" in capsys.readouterr().out


# =============================================================================
# ERRORS
# =============================================================================

class TestErrors:
    """Exit codes for bad input."""

    def test_no_command(self, capsys):
        assert main([]) == 2
        assert "generate" in capsys.readouterr().out

    def test_malformed_spec_file(self, capsys, spec_file):
        path = spec_file("{not json")

        assert main(["generate", "--spec", path]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_unknown_axis(self, capsys, spec_file):
        path = spec_file({"colour": "blue"})

        assert main(["analyze", "--spec", path]) == 1
        assert "Unknown spec axis: colour" in capsys.readouterr().err

    def test_missing_spec_file(self, capsys, tmp_path):
        assert main(["generate", "--spec", str(tmp_path / "absent.json")]) == 1
        assert capsys.readouterr().err.startswith("Error:")
