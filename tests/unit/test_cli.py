"""
CLI Unit Tests
Tests for merkle_cli/main.py and the command modules

Covers:
- root/prove/verify agree with the library
- exit codes (0 ok, 1 error, 2 verification failed)
- config --init/--show
"""
import json
import logging

import pytest

from merkle_core.crypto.hashing import to_hex
from merkle_core.merkle import MerkleTree
from merkle_cli.inputs import parse_value
from merkle_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory with no user config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def _write_proof(workdir, capsys, *argv):
    out = workdir / "proof.json"
    assert main(["prove", *argv, "--out", str(out)]) == EXIT_SUCCESS
    capsys.readouterr()
    return out


class TestParseValue:
    """Tests for command-line value parsing."""

    def test_json_number(self):
        assert parse_value("7") == 7

    def test_json_string(self):
        assert parse_value('"7"') == "7"

    def test_bare_word(self):
        assert parse_value("apple") == "apple"


class TestRootCommand:
    """Tests for `merkle root`."""

    def test_root_matches_library(self, capsys):
        assert main(["root", "1", "2", "3"]) == EXIT_SUCCESS

        out = capsys.readouterr().out.strip()
        assert out == to_hex(MerkleTree([1, 2, 3]).root())

    def test_root_range(self, capsys):
        assert main(["root", "--range", "5"]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == to_hex(MerkleTree(range(5)).root())

    def test_root_from_file(self, workdir, capsys):
        values_path = workdir / "values.json"
        values_path.write_text(json.dumps(["a", {"k": 1}, None]))

        assert main(["root", "--from-file", str(values_path)]) == EXIT_SUCCESS

        expected = MerkleTree(["a", {"k": 1}, None]).root()
        assert capsys.readouterr().out.strip() == to_hex(expected)

    def test_root_json(self, capsys):
        assert main(["root", "--range", "5", "--json", "--hash", "blake2b-64"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["hashAlgorithm"] == "blake2b-64"
        assert data["valueCount"] == 5
        assert data["leafCount"] == 8
        assert data["padding"] == "default_value"

    def test_padding_option_changes_root(self, capsys):
        main(["root", "1", "2", "3"])
        default_root = capsys.readouterr().out.strip()
        main(["root", "1", "2", "3", "--padding", "sentinel"])
        sentinel_root = capsys.readouterr().out.strip()

        assert default_root != sentinel_root

    def test_pad_value_for_string_trees(self, capsys):
        main(["root", "a", "b", "c"])
        int_padded = capsys.readouterr().out.strip()
        main(["root", "a", "b", "c", "--pad-value", '""'])
        str_padded = capsys.readouterr().out.strip()

        expected = MerkleTree(["a", "b", "c"], default_factory=str).root()
        assert str_padded == to_hex(expected)
        assert int_padded == to_hex(MerkleTree(["a", "b", "c"]).root())
        assert str_padded != int_padded

    def test_conflicting_sources(self, capsys):
        assert main(["root", "1", "--range", "3"]) == EXIT_RUNTIME_ERROR

        assert "only one of" in capsys.readouterr().err

    def test_from_file_not_array(self, workdir, capsys):
        values_path = workdir / "values.json"
        values_path.write_text(json.dumps({"a": 1}))

        assert main(["root", "--from-file", str(values_path)]) == EXIT_RUNTIME_ERROR


class TestProveCommand:
    """Tests for `merkle prove`."""

    def test_prove_to_stdout(self, capsys):
        assert main(["prove", "1", "10", "20", "30"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        expected = MerkleTree([10, 20, 30]).get_proof(1)
        assert data == expected.to_dict()

    def test_prove_to_file(self, workdir, capsys):
        out = workdir / "proof.json"

        assert main(["prove", "2", "--range", "4", "--out", str(out)]) == EXIT_SUCCESS

        assert "Wrote proof to" in capsys.readouterr().out
        assert json.loads(out.read_text())["hashAlgorithm"] == "sha256"

    def test_padding_index_is_provable(self, capsys):
        """Indices past the stored values but inside the padded width are valid."""
        assert main(["prove", "3", "10", "20", "30"]) == EXIT_SUCCESS

    def test_index_out_of_range(self, capsys):
        assert main(["prove", "4", "10", "20", "30"]) == EXIT_RUNTIME_ERROR

        assert "out of range" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for `merkle verify`."""

    def test_valid_proof(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "2", "--range", "5")

        assert main(["verify", str(proof_path)]) == EXIT_SUCCESS

        assert "path_ok: true" in capsys.readouterr().out

    def test_value_and_root(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "2", "--range", "5")
        root = to_hex(MerkleTree(range(5)).root())

        code = main(["verify", str(proof_path), "--value", "2", "--root", root, "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["path_ok"] is True
        assert data["value_ok"] is True
        assert data["root_ok"] is True

    def test_wrong_value(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "2", "--range", "5")

        assert main(["verify", str(proof_path), "--value", "3"]) == EXIT_VERIFICATION_FAILED

        assert "value_ok: false" in capsys.readouterr().out

    def test_wrong_root(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "2", "--range", "5")
        other = to_hex(MerkleTree(range(6)).root())

        assert main(["verify", str(proof_path), "--root", other]) == EXIT_VERIFICATION_FAILED

    def test_tampered_proof(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "2", "--range", "5")
        data = json.loads(proof_path.read_text())
        data["path"][0]["direction"] = "left" if data["path"][0]["direction"] == "right" else "right"
        proof_path.write_text(json.dumps(data))

        assert main(["verify", str(proof_path), "--json"]) == EXIT_VERIFICATION_FAILED

        report = json.loads(capsys.readouterr().out)
        assert report["path_ok"] is False
        assert report["errors"]

    def test_proof_uses_recorded_hasher(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "0", "--range", "3", "--hash", "blake2b-256")

        assert main(["verify", str(proof_path)]) == EXIT_SUCCESS

    def test_missing_proof(self, workdir, capsys):
        assert main(["verify", str(workdir / "missing.json")]) == EXIT_RUNTIME_ERROR

    def test_malformed_proof(self, workdir, capsys):
        proof_path = workdir / "proof.json"
        proof_path.write_text(json.dumps({"leaf": "0x00"}))

        assert main(["verify", str(proof_path)]) == EXIT_RUNTIME_ERROR

        assert "Error loading proof" in capsys.readouterr().err

    def test_unknown_hasher(self, workdir, capsys):
        proof_path = _write_proof(workdir, capsys, "0", "--range", "2")
        data = json.loads(proof_path.read_text())
        data["hashAlgorithm"] = "md4"
        proof_path.write_text(json.dumps(data))

        assert main(["verify", str(proof_path)]) == EXIT_RUNTIME_ERROR


class TestDemoCommand:
    """Tests for `merkle demo`."""

    def test_demo_human(self, capsys):
        assert main(["demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert out.count("  [") == 8
        assert "valid: true" in out

    def test_demo_json(self, capsys):
        assert main(["demo", "--json"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        tree = MerkleTree(range(5))
        assert data["root"] == to_hex(tree.root())
        assert data["proof"] == tree.get_proof(2).to_dict()
        assert data["valid"] is True


class TestConfigCommand:
    """Tests for `merkle config` and config-driven defaults."""

    def test_init_creates_file(self, workdir, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS

        assert (workdir / "merkle.json").exists()

    def test_init_refuses_overwrite(self, workdir, capsys):
        (workdir / "merkle.json").write_text("{}")

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_show_reflects_env(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "blake2b-64")

        assert main(["config", "--show"]) == EXIT_SUCCESS

        assert json.loads(capsys.readouterr().out)["hash_algorithm"] == "blake2b-64"

    def test_config_file_sets_output_format(self, workdir, capsys):
        config_path = workdir / "custom.json"
        config_path.write_text(json.dumps({"default_output_format": "json"}))

        assert main(["--config", str(config_path), "root", "1", "2"]) == EXIT_SUCCESS

        assert "root" in json.loads(capsys.readouterr().out)

    def test_bad_config_file(self, workdir, capsys):
        assert main(["--config", str(workdir / "nope.json"), "demo"]) == EXIT_RUNTIME_ERROR

        assert "Error loading configuration" in capsys.readouterr().err

    def test_debug_env_sets_log_level(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_DEBUG", "true")

        assert main(["root", "1"]) == EXIT_SUCCESS

        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_flag_beats_debug_env(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_DEBUG", "true")

        assert main(["--log-level", "ERROR", "root", "1"]) == EXIT_SUCCESS

        assert logging.getLogger().level == logging.ERROR

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

        assert "usage" in capsys.readouterr().out.lower()
