from __future__ import annotations

import pytest

import randlib.recover as recover_mod
from randlib.generator import Random
from randlib.lfsr import LFSR128
from randlib.oracle import create_app
from randlib.recover import (
    build_maps,
    construct_equations,
    predict_next,
    recover_state,
    solve_gf2,
)
from randlib.seed import expand_tick


class _Resp:
    def __init__(self, flask_resp) -> None:
        self._resp = flask_resp

    def json(self):
        return self._resp.get_json()

    def raise_for_status(self) -> None:
        assert self._resp.status_code < 400


def test_maps_match_engine() -> None:
    # evaluating each map on a concrete state gives the engine's output bits
    seed = expand_tick(11)
    lfsr = LFSR128(seed)
    for mask in build_maps(300):
        assert bin(mask & seed).count("1") & 1 == lfsr.step()


def test_recover_from_four_u32() -> None:
    seed = expand_tick(42)
    rng = Random.from_seed(seed)
    words = [rng.rand_u32() for _ in range(4)]
    assert recover_state(words, 32) == seed


def test_recover_mid_stream_and_predict() -> None:
    rng = Random.from_seed(expand_tick(9))
    rng.rand_u64()
    state = rng.state
    words = [rng.rand_bits(16) for _ in range(10)]
    assert recover_state(words, 16) == state
    assert predict_next(state, 160, 16) == rng.rand_bits(16)


def test_too_few_bits_is_underdetermined() -> None:
    rng = Random.from_seed(expand_tick(3))
    words = [rng.rand_u32() for _ in range(2)]
    assert recover_state(words, 32) is None


def test_inconsistent_system() -> None:
    rows, rhs = construct_equations([0xFFFFFFFF] * 8, 32)
    rows.append(rows[0])
    rhs.append(rhs[0] ^ 1)
    assert solve_gf2(rows, rhs) is None


def test_cli_against_draw_service(monkeypatch, capsys) -> None:
    app = create_app(Random.from_seed(expand_tick(77)), output_bits=32)
    client = app.test_client()
    base = "http://oracle.test"

    monkeypatch.setattr(
        recover_mod.requests, "get", lambda url, timeout=None: _Resp(client.get(url[len(base):]))
    )
    monkeypatch.setattr(
        recover_mod.requests,
        "post",
        lambda url, json=None, timeout=None: _Resp(client.post(url[len(base):], json=json)),
    )

    rc = recover_mod.main(["--oracle", base, "--samples", "4", "--output_bits", "32"])
    out = capsys.readouterr().out
    assert rc == 0
    assert format(expand_tick(77), "032x") in out
    assert "'ok': True" in out


@pytest.mark.parametrize("samples", [1, 3])
def test_cli_reports_failure_with_too_few_samples(monkeypatch, capsys, samples: int) -> None:
    app = create_app(Random.from_seed(5), output_bits=32)
    client = app.test_client()
    monkeypatch.setattr(
        recover_mod.requests, "get", lambda url, timeout=None: _Resp(client.get(url[len("http://x"):]))
    )
    rc = recover_mod.main(["--oracle", "http://x", "--samples", str(samples)])
    assert rc == 1
    assert "Failed to find unique solution" in capsys.readouterr().out
