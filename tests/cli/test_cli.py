from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from prime_stream.adapters.clocks import ManualClock
from prime_stream.app.cli import parse_args, resolve_config, run

CONFIG = """
version: 1
stream:
  epoch_ms: 0
  prefill_count: 5
generator:
  step_interval_ms: 1
logging:
  sink: none
"""


def _config_file(tmp_path: Path) -> Path:
    path = tmp_path / "stream.yml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


def test_parse_args_reads_flags() -> None:
    args = parse_args(["--config", "cfg.yml", "--duration-ms", "50", "--no-live", "--demand-every-ms", "10"])
    assert args.config == "cfg.yml"
    assert args.duration_ms == 50
    assert args.live is False
    assert args.demand_every_ms == 10


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.config is None
    assert args.live is True
    assert args.log_path is None


def test_log_path_overrides_config(tmp_path: Path) -> None:
    args = parse_args(["--config", str(_config_file(tmp_path)), "--log-path", "run.jsonl"])
    config = resolve_config(args)
    assert config.logging.sink == "jsonl"
    assert config.logging.path == "run.jsonl"


def test_run_prints_history_and_status(tmp_path: Path) -> None:
    out = io.StringIO()
    code = run(
        ["--config", str(_config_file(tmp_path)), "--duration-ms", "10", "--tail", "50"],
        clock=ManualClock(wall=100),
        out=out,
    )
    lines = out.getvalue().splitlines()
    assert code == 0
    assert lines[-1].startswith("GENESIS: Jan 1, 1970, 00:00:00 | CURRENT: 157 | BUFFER: 16 / 5000")
    assert any("CONNECTED TO GLOBAL STREAM" in line for line in lines)


def test_run_writes_jsonl_log(tmp_path: Path) -> None:
    log_path = tmp_path / "run.jsonl"
    run(
        ["--config", str(_config_file(tmp_path)), "--duration-ms", "5", "--log-path", str(log_path)],
        clock=ManualClock(wall=100),
        out=io.StringIO(),
    )
    messages = [json.loads(line)["message"] for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert messages == ["stream joined", "stream stopped"]


def test_demand_source_reveals_backlog(tmp_path: Path) -> None:
    # Zero sync threshold makes the pending count visible in the status line.
    path = tmp_path / "strict.yml"
    path.write_text(CONFIG + "reveal:\n  sync_threshold: 0\n", encoding="utf-8")
    base = ["--config", str(path), "--duration-ms", "20", "--no-live"]

    idle = io.StringIO()
    run(base, clock=ManualClock(wall=100), out=idle)
    assert idle.getvalue().splitlines()[-1].endswith("SYNCING HISTORY (20 PENDING)")

    # Demand at t=10 and t=20 queues behind the generator step due at the same
    # instant, so each clears the whole backlog; only steps 21..25 stay pending.
    scrolling = io.StringIO()
    run(
        ["--config", str(path), "--duration-ms", "25", "--no-live", "--demand-every-ms", "10"],
        clock=ManualClock(wall=100),
        out=scrolling,
    )
    assert scrolling.getvalue().splitlines()[-1].endswith("SYNCING HISTORY (5 PENDING)")


@pytest.mark.parametrize("interval", ["0", "-5"])
def test_demand_interval_must_be_positive(tmp_path: Path, interval: str) -> None:
    with pytest.raises(SystemExit, match="--demand-every-ms must be positive"):
        run(
            ["--config", str(_config_file(tmp_path)), "--demand-every-ms", interval],
            clock=ManualClock(wall=100),
            out=io.StringIO(),
        )
