"""Tests for the rooclino command line."""
import json

import pytest

from rooclino.cli import build_parser, main
from rooclino.parsing.cbor import MAX_DEPTH_LIMIT

UPLINK_HEX = "8401" "8201f94d60" "8202182d" "8203190264"


def test_decode_prints_json(capsys):
    assert main(["decode", "a26161016162820203"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": 1, "b": [2, 3]}


def test_decode_keep_tags(capsys):
    assert main(["decode", "c10a", "--keep-tags"]) == 0
    assert json.loads(capsys.readouterr().out) == {"tag": 1, "value": 10}


def test_decode_drops_tags_by_default(capsys):
    assert main(["decode", "c10a"]) == 0
    assert json.loads(capsys.readouterr().out) == 10


def test_decode_from_file(tmp_path, capsys):
    path = tmp_path / "payload.cbor"
    path.write_bytes(bytes.fromhex("a10102"))
    assert main(["decode", "--file", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"1": 2}


def test_uplink_prints_reading(capsys):
    assert main(["--indent", "0", "uplink", UPLINK_HEX]) == 0
    assert json.loads(capsys.readouterr().out) == {"temperature": 22, "humidity": 45, "co2": 612}


def test_decode_error_exit_code(capsys):
    assert main(["decode", "1c"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: malformed_length_encoding:")


def test_depth_limit_option(capsys):
    assert main(["--max-depth", "1", "decode", "818100"]) == 1
    assert "depth_limit_exceeded" in capsys.readouterr().err


def test_uplink_with_non_array_packet(capsys):
    assert main(["uplink", "01"]) == 1
    assert "expected array got integer" in capsys.readouterr().err


def test_missing_payload(capsys):
    assert main(["decode"]) == 1
    assert "either a hex payload or --file is required" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["decode", "--file", str(tmp_path / "nope.cbor")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_invalid_hex(capsys):
    assert main(["decode", "xyz"]) == 1
    assert "Invalid hex payload" in capsys.readouterr().err


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.mark.parametrize("depth", ["0", "5000", str(MAX_DEPTH_LIMIT + 1), "deep"])
def test_max_depth_out_of_range_is_rejected(depth, capsys):
    with pytest.raises(SystemExit) as info:
        main(["--max-depth", depth, "decode", "81" * 3000 + "00"])
    assert info.value.code == 2
    assert "--max-depth" in capsys.readouterr().err


def test_deep_payload_at_highest_depth_limit(capsys):
    assert main(["--max-depth", str(MAX_DEPTH_LIMIT), "decode", "81" * 3000 + "00"]) == 1
    assert "depth_limit_exceeded" in capsys.readouterr().err
    assert main(["--max-depth", str(MAX_DEPTH_LIMIT), "--indent", "0", "decode", "81" * MAX_DEPTH_LIMIT + "00"]) == 0
