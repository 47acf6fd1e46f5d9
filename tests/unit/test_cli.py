"""
CLI Tests
Tests for merklesum_cli (root, prove, config commands and leaf parsing).
"""
import json

import pytest

from merklesum.crypto.hashing import to_hex, uint_to_bytes32
from merklesum.merkle import build_tree, get_root
from merklesum_cli.leaves import LeafArgumentError, parse_leaf, sequence_leaves
from merklesum_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    create_parser,
    main,
)


def _leaf_arg(value: int, seed: int) -> str:
    return f"{value}:{to_hex(uint_to_bytes32(seed))}"


class TestLeafParsing:
    """Tests for VALUE:0xDATA parsing."""

    def test_parse_leaf(self):
        value, data = parse_leaf(_leaf_arg(12, 3))

        assert value == 12
        assert data == uint_to_bytes32(3)

    def test_parse_leaf_hex_value(self):
        value, _ = parse_leaf("0x10:0x" + "00" * 32)
        assert value == 16

    def test_missing_separator(self):
        with pytest.raises(LeafArgumentError):
            parse_leaf("12")

    def test_bad_value(self):
        with pytest.raises(LeafArgumentError):
            parse_leaf("ten:0x" + "00" * 32)

    def test_bad_data(self):
        with pytest.raises(LeafArgumentError):
            parse_leaf("1:zz")

    def test_sequence(self):
        values, data = sequence_leaves(3)

        assert values == [0, 1, 2]
        assert data == [uint_to_bytes32(i) for i in range(3)]


class TestParser:
    """Tests for argument parsing."""

    def test_root_sequence(self):
        args = create_parser().parse_args(["root", "--sequence", "5"])

        assert args.command == "root"
        assert args.sequence == 5
        assert args.leaves == []

    def test_prove_index(self):
        args = create_parser().parse_args(["prove", "3", "-n", "10"])

        assert args.index == 3
        assert args.sequence == 10


class TestRootCommand:
    """Tests for `merklesum root`."""

    def test_sequence_100(self, capsys):
        exit_code = main(["root", "--sequence", "100"])
        out = capsys.readouterr().out

        values, data = sequence_leaves(100)
        root = get_root(build_tree(values, data))

        assert exit_code == EXIT_SUCCESS
        assert "nodes: 199" in out
        assert "depth: 7" in out
        assert "root_sum: 4950" in out
        assert f"root_hash: {to_hex(root.hash)}" in out

    def test_explicit_leaves(self, capsys):
        exit_code = main(["root", _leaf_arg(5, 0), _leaf_arg(7, 1)])
        out = capsys.readouterr().out

        assert exit_code == EXIT_SUCCESS
        assert "leaves: 2" in out
        assert "root_sum: 12" in out

    def test_no_leaves(self, capsys):
        exit_code = main(["root"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "zero leaves" in capsys.readouterr().err

    def test_bad_leaf(self, capsys):
        exit_code = main(["root", "oops"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "VALUE:0xDATA" in capsys.readouterr().err

    def test_short_data(self, capsys):
        exit_code = main(["root", "1:0x00"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "32 bytes" in capsys.readouterr().err

    def test_parallel_flag(self, capsys):
        assert main(["root", "--sequence", "100", "--parallel"]) == EXIT_SUCCESS
        assert "root_sum: 4950" in capsys.readouterr().out


class TestProveCommand:
    """Tests for `merklesum prove`."""

    def test_prove_first_leaf(self, capsys):
        exit_code = main(["prove", "0", "--sequence", "100"])
        out = capsys.readouterr().out

        assert exit_code == EXIT_SUCCESS
        assert "levels: 7" in out
        assert "verified: true" in out

    def test_prove_carried_leaf(self, capsys):
        exit_code = main(["prove", "2", _leaf_arg(1, 0), _leaf_arg(2, 1), _leaf_arg(3, 2)])
        out = capsys.readouterr().out

        assert exit_code == EXIT_SUCCESS
        assert "levels: 1" in out
        assert "right" in out

    def test_index_out_of_range(self, capsys):
        exit_code = main(["prove", "100", "--sequence", "100"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for `merklesum config`."""

    def test_show(self, capsys, monkeypatch):
        monkeypatch.delenv("MERKLESUM_PARALLEL", raising=False)
        exit_code = main(["config", "--show"])
        shown = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_SUCCESS
        assert shown["build"]["parallel_threshold"] == 1024

    def test_show_from_yaml(self, capsys, tmp_path):
        path = tmp_path / "merklesum.yaml"
        path.write_text("build:\n  parallel_threshold: 7\n")

        exit_code = main(["--config", str(path), "config", "--show"])
        shown = json.loads(capsys.readouterr().out)

        assert exit_code == EXIT_SUCCESS
        assert shown["build"]["parallel_threshold"] == 7

    def test_missing_config_file(self, capsys, tmp_path):
        exit_code = main(["--config", str(tmp_path / "nope.yaml"), "config", "--show"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
