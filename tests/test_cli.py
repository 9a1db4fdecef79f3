from __future__ import annotations

import pytest

from randlib import config
from randlib.__main__ import main
from randlib.generator import Random


def test_manual_seed_output(capsys) -> None:
    assert main(["--source", "manual", "--seed", "1", "--count", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    expected = Random.from_seed(1)
    assert lines[0] == str(expected.random())
    assert lines[1] == str(expected.random())
    assert lines[2] == f"i128: {expected.rand_i128()}"
    assert lines[-1].startswith("f64: ")


def test_hex_seed(capsys) -> None:
    main(["--source", "manual", "--seed", "0x1", "--count", "1"])
    assert capsys.readouterr().out.splitlines()[0] == str(Random.from_seed(1).random())


def test_disabled_source_exits(monkeypatch, capsys) -> None:
    monkeypatch.setattr(config, "ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE", False)
    with pytest.raises(SystemExit) as exc:
        main(["--source", "time"])
    assert exc.value.code == 2
    assert "disabled" in capsys.readouterr().err


def test_unknown_source(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["--source", "hmac"])
    assert "Unknown seed source" in capsys.readouterr().err
