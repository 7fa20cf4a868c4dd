from __future__ import annotations

import sys

import pytest

from dexpaprika import cli
from dexpaprika.client import DexPaprikaClient
from dexpaprika.config import ClientConfig
from tests.fakes import RecordingSleep, ScriptedTransport, failure

POOLS_PAYLOAD = {
    "pools": [
        {
            "id": "0x88e6",
            "dex_name": "Uniswap V3",
            "chain": "ethereum",
            "volume_usd": 2_500_000,
            "tokens": [
                {"id": "0xa0b8", "symbol": "USDC"},
                {"id": "0xc02a", "symbol": "WETH"},
            ],
        }
    ],
    "page_info": {"limit": 10, "page": 0},
}


def _install_transport(
    monkeypatch: pytest.MonkeyPatch, transport: ScriptedTransport
) -> None:
    def factory(config: ClientConfig) -> DexPaprikaClient:
        return DexPaprikaClient(config, transport=transport, sleep=RecordingSleep())

    monkeypatch.setattr(cli, "load_config", ClientConfig)
    monkeypatch.setattr(cli, "DexPaprikaClient", factory)


def test_pools_command_prints_pairs(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    transport = ScriptedTransport(outcomes=[POOLS_PAYLOAD])
    _install_transport(monkeypatch, transport)
    monkeypatch.setattr(sys, "argv", ["dexpaprika", "pools", "--network", "ethereum"])

    cli.main()

    output = capsys.readouterr().out
    assert "USDC/WETH [Uniswap V3 on ethereum] volume $2.50M" in output
    assert transport.calls[0].url.endswith("/networks/ethereum/pools")


def test_stats_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    transport = ScriptedTransport(
        outcomes=[{"chains": 3, "factories": 4, "pools": 5, "tokens": 6}]
    )
    _install_transport(monkeypatch, transport)
    monkeypatch.setattr(sys, "argv", ["dexpaprika", "stats"])

    cli.main()

    assert capsys.readouterr().out.splitlines() == [
        "chains: 3",
        "factories: 4",
        "pools: 5",
        "tokens: 6",
    ]


def test_request_failure_exits_with_message(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _install_transport(monkeypatch, ScriptedTransport(outcomes=[failure(404)]))
    monkeypatch.setattr(sys, "argv", ["dexpaprika", "networks"])

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert "HTTP 404" in capsys.readouterr().err
