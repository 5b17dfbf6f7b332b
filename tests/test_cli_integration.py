import os

import pytest

from test_utils import (
    copy_config,
    filter_out_ansi_escape_codes,
    install_solver,
    run_crun,
    run_crun_json,
)


@pytest.mark.parametrize(
    "args",
    [
        ["--help"],
        ["run", "--help"],
        ["batch", "--help"],
        ["locate", "--help"],
        ["locate", "--help-all"],
        ["run", "--help-all", "config.json"],
    ],
)
def test_help_exits_cleanly(tmp_path, args):
    result = run_crun(args, cwd=tmp_path)
    assert "usage" in filter_out_ansi_escape_codes(result.stdout).lower()


def test_secondary_options_only_in_full_help(tmp_path):
    short = run_crun(["run", "--help"], cwd=tmp_path).stdout
    full = run_crun(["run", "--help-all", "config.json"], cwd=tmp_path).stdout
    assert "turn colors off" not in short
    assert "turn colors off" in full
    assert "--timeout" in short


@pytest.mark.parametrize(
    "args",
    [
        ["run"],
        ["run", "--no-such-flag", "config.json"],
        ["batch"],
        ["frobnicate"],
    ],
)
def test_bad_arguments_fail(tmp_path, args):
    assert run_crun(args, cwd=tmp_path, check=False).returncode != 0


def test_run_writes_json_report(tmp_path):
    install_solver("ok", tmp_path)
    config = copy_config("two_fields", tmp_path)

    result, data = run_crun_json(["run", "--boring", config.name], cwd=tmp_path)
    output = filter_out_ansi_escape_codes(result.stdout)

    assert data["success"] is True
    assert data["status"] == "OK"
    assert data["exitCode"] == 0
    assert sorted(data["outputFiles"]) == sorted(
        ["background.dat", "cwd.txt", "input_copy.txt", os.path.join("spectra", "ps.dat")]
    )
    assert "fields: 2" in data["output"]
    assert "Calculation completed successfully!" in output
    assert data["executionId"][:8] in output

    input_file = tmp_path / "spare" / f"input_{data['executionId']}.txt"
    lines = input_file.read_text().splitlines()
    assert lines[0] == "2"
    assert lines[9] == "custom"
    assert lines[-1] == "0.5*m^2*phi1^2 + lambda*phi2^4"


def test_run_without_solver_tells_how_to_compile(tmp_path):
    (tmp_path / "spare").mkdir()
    backend = tmp_path / "backend"
    backend.mkdir()
    config = copy_config("single_field", backend)

    result, data = run_crun_json(
        ["run", "--boring", config.name], cwd=backend, check=False
    )

    assert result.returncode == 1
    assert data["status"] == "NOEXE"
    assert data["outputFiles"] is None
    assert "cd spare && gfortran gravitationalwaves.f -o m.exe" in result.stdout


def test_run_with_explicit_solver(tmp_path):
    (tmp_path / "elsewhere").mkdir()
    exe = install_solver("ok", tmp_path / "elsewhere")
    config = copy_config("single_field", tmp_path)

    _, data = run_crun_json(
        ["run", "--boring", "--solver", str(exe), config.name], cwd=tmp_path
    )

    assert data["success"] is True
    assert (exe.parent / f"output_{data['executionId']}").is_dir()


def test_run_timeout_is_reported(tmp_path):
    install_solver("slow", tmp_path)
    config = copy_config("single_field", tmp_path)

    result, data = run_crun_json(
        ["run", "--boring", "--timeout", "1", config.name], cwd=tmp_path, check=False
    )

    assert result.returncode == 1
    assert data["status"] == "TLE"
    assert data["message"] == "Execution timeout after 1 seconds"
    assert data["outputFiles"] == ["started.flag"]


def test_run_reports_solver_failure(tmp_path):
    install_solver("failing", tmp_path)
    config = copy_config("single_field", tmp_path)

    result, data = run_crun_json(
        ["run", "--boring", "-q", config.name], cwd=tmp_path, check=False
    )

    assert result.returncode == 1
    assert data["status"] == "EXC"
    assert data["exitCode"] == 3
    assert "integration diverged" in data["output"]
    assert data["outputFiles"] == ["partial.dat"]


def test_invalid_configuration_is_rejected(tmp_path):
    install_solver("ok", tmp_path)
    config = copy_config("mismatched", tmp_path)

    result = run_crun(["run", "--boring", config.name], cwd=tmp_path, check=False)

    assert result.returncode != 0
    assert "Invalid configuration" in result.stdout
    assert not list((tmp_path / "spare").glob("input_*.txt"))


def test_negative_timeout_is_rejected(tmp_path):
    config = copy_config("single_field", tmp_path)
    result = run_crun(
        ["run", "--boring", "--timeout", "-1", config.name], cwd=tmp_path, check=False
    )
    assert result.returncode != 0
    assert "Timeout must not be negative" in result.stdout


def test_batch_runs_every_configuration(tmp_path):
    install_solver("ok", tmp_path)
    configs = [copy_config(n, tmp_path).name for n in ("single_field", "two_fields")]

    result, data = run_crun_json(
        ["batch", "--boring", "-j", "2", *configs], cwd=tmp_path
    )
    output = filter_out_ansi_escape_codes(result.stdout)

    assert [r["success"] for r in data] == [True, True]
    assert len({r["executionId"] for r in data}) == 2
    assert "fields: 1" in data[0]["output"]
    assert "fields: 2" in data[1]["output"]
    assert "Exit code" in output


def test_batch_fails_when_any_run_fails(tmp_path):
    install_solver("failing", tmp_path)
    config = copy_config("single_field", tmp_path).name

    result, data = run_crun_json(
        ["batch", "--boring", "--no-statistics", config, config],
        cwd=tmp_path,
        check=False,
    )

    assert result.returncode == 1
    assert [r["status"] for r in data] == ["EXC", "EXC"]
    assert "Exit code" not in filter_out_ansi_escape_codes(result.stdout)


def test_locate_finds_solver_next_to_backend(tmp_path):
    exe = install_solver("ok", tmp_path)
    backend = tmp_path / "backend"
    backend.mkdir()

    result = run_crun(["locate", "--boring"], cwd=backend)

    (line,) = [l for l in result.stdout.splitlines() if l.startswith("Solver: ")]
    assert "Checking path" in result.stdout
    assert os.path.samefile(line.removeprefix("Solver: "), exe)


def test_locate_without_solver_fails(tmp_path):
    result = run_crun(["locate", "--boring"], cwd=tmp_path, check=False)

    assert result.returncode == 1
    assert "Solver not found" in result.stdout
    assert "gfortran" in result.stdout
