from datetime import timedelta

from cosmo_runner.common import results
from cosmo_runner.common.context import allocate_context
from cosmo_runner.common.messages import Color, Status


def test_success_message_shows_count_and_short_id():
    context = allocate_context("/opt/spare/m.exe")
    result = results.succeeded(context, "done\n", ["a.dat", "b.dat"], timedelta(1))

    assert result.success and result.status == Status.ok
    assert "Generated 2 output file(s)" in result.message
    assert f"Execution ID: {context.execution_id[:8]}..." in result.message
    assert context.execution_id not in result.message
    assert result.output_files == ("a.dat", "b.dat")


def test_json_uses_ui_keys():
    context = allocate_context("/opt/spare/m.exe")
    result = results.nonzero_exit(context, 2, "oops\n", ["p.dat"], timedelta(seconds=3))

    assert result.get_json() == {
        "executionId": context.execution_id,
        "success": False,
        "message": "Solver exited with error code 2. Check output for details.",
        "output": "oops\n",
        "outputFiles": ["p.dat"],
        "status": "EXC",
        "exitCode": 2,
        "elapsed": 3.0,
    }


def test_unexpected_failure_names_the_cause():
    context = allocate_context("/opt/spare/m.exe")
    try:
        try:
            raise KeyError("kstar")
        except KeyError as e:
            raise RuntimeError("bad payload") from e
    except RuntimeError as e:
        result = results.unexpected_failure(context, e)

    assert result.status == Status.err
    assert result.message == "Error: bad payload"
    assert result.output == "RuntimeError: bad payload (Caused by: 'kstar')"
    assert result.output_files is None


def test_statistics_row_is_plain_without_colors():
    Color.setup(False)
    try:
        context = allocate_context("/opt/spare/m.exe")
        row = results.timed_out(context, timedelta(seconds=1), "", None).get_statistics()
    finally:
        Color.setup(True)
    cells = [c.strip() for c in row.split("|")[1:-1]]
    assert cells == [context.execution_id[:8] + "...", "TLE", "-", "-", "-"]
