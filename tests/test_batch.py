import json
import time
from concurrent.futures import Future
from datetime import timedelta

from cosmo_runner import solver_batch
from cosmo_runner.common.commands import Config
from cosmo_runner.common.parser.specifications import ArgsBatch
from test_utils import copy_config, install_solver


def batch_args(tmp_path, exe, configs, **overrides):
    kwargs = dict(
        full_help=False,
        solver=str(exe),
        timeout=60.0,
        colorful=True,
        quiet=True,
        stats=True,
        json=str(tmp_path / "out.json"),
        threads=2,
        configs=[str(c) for c in configs],
    )
    kwargs.update(overrides)
    return ArgsBatch(**kwargs)


def keep_config(monkeypatch):
    for key in ("solver", "quiet", "timeout"):
        monkeypatch.setattr(Config, key, getattr(Config, key))


def test_batch_reports_every_run(tmp_path, monkeypatch):
    keep_config(monkeypatch)
    exe = install_solver("ok", tmp_path)
    configs = [copy_config(n, tmp_path) for n in ("single_field", "two_fields")]

    assert solver_batch.run(batch_args(tmp_path, exe, configs)) == 0

    data = json.loads((tmp_path / "out.json").read_text())
    assert [r["status"] for r in data] == ["OK", "OK"]


def test_interrupted_batch_kills_solvers(tmp_path, monkeypatch):
    keep_config(monkeypatch)
    exe = install_solver("slow", tmp_path)
    config = copy_config("single_field", tmp_path)
    original_result = Future.result
    interrupted = []

    def interrupted_result(self, timeout=None):
        if not interrupted:
            interrupted.append(True)
            deadline = time.monotonic() + 20
            while len(list((tmp_path / "spare").glob("output_*/started.flag"))) < 2:
                assert time.monotonic() < deadline
                time.sleep(0.05)
            raise KeyboardInterrupt
        return original_result(self, timeout)

    monkeypatch.setattr(Future, "result", interrupted_result)
    start = time.monotonic()
    code = solver_batch.run(batch_args(tmp_path, exe, [config] * 3))

    assert time.monotonic() - start < 30
    assert code == 130
    data = json.loads((tmp_path / "out.json").read_text())
    assert [r["status"] for r in data] == ["INT", "INT", "INT"]
    # the third run was still queued when the batch was interrupted
    assert len(list((tmp_path / "spare").glob("input_*.txt"))) == 2
