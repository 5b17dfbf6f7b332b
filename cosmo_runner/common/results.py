# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional, Sequence

from cosmo_runner.common.commands import Config, format_seconds, short_id
from cosmo_runner.common.context import ExecutionContext
from cosmo_runner.common.messages import Color, Status, table_header, table_row


@dataclass(frozen=True)
class ExecutionResult:
    execution_id: str
    success: bool
    message: str
    output: Optional[str] = None
    output_files: Optional[tuple[str, ...]] = None
    status: Status = Status.ok
    exit_code: Optional[int] = None
    elapsed: Optional[timedelta] = None

    def get_json(self) -> dict[str, Any]:
        return {
            "executionId": self.execution_id,
            "success": self.success,
            "message": self.message,
            "output": self.output,
            "outputFiles": (
                None if self.output_files is None else list(self.output_files)
            ),
            "status": str(self.status),
            "exitCode": self.exit_code,
            "elapsed": None if self.elapsed is None else self.elapsed.total_seconds(),
        }

    def get_statistics(self) -> str:
        color = Color.infog if self.success else Color.warning
        elapsed = "-" if self.elapsed is None else round(self.elapsed.total_seconds(), 2)
        files = "-" if self.output_files is None else len(self.output_files)
        exit_code = "-" if self.exit_code is None else self.exit_code
        columns = [short_id(self.execution_id), self.status, exit_code, files, elapsed]
        return table_row(color, columns, statistics_widths, "<<>>>")


statistics_widths = (11, 6, 9, 6, 9)


def get_statistics_header() -> str:
    colnames = ["Execution", "Status", "Exit code", "Files", "Time [s]"]
    return table_header(colnames, statistics_widths, "<<>>>")


def _files(output_files: Optional[Sequence[str]]) -> Optional[tuple[str, ...]]:
    return None if output_files is None else tuple(output_files)


def error_details(e: BaseException) -> str:
    details = f"{type(e).__name__}: {e}"
    if e.__cause__ is not None:
        details += f" (Caused by: {e.__cause__})"
    return details


def succeeded(
    context: ExecutionContext,
    output: str,
    output_files: Sequence[str],
    elapsed: Optional[timedelta] = None,
) -> ExecutionResult:
    message = (
        f"Calculation completed successfully! "
        f"Generated {len(output_files)} output file(s). "
        f"Execution ID: {short_id(context.execution_id)}"
    )
    return ExecutionResult(
        context.execution_id,
        True,
        message,
        output,
        _files(output_files),
        Status.ok,
        0,
        elapsed,
    )


def missing_workdir(context: ExecutionContext) -> ExecutionResult:
    message = f"Work directory does not exist: {context.workdir}"
    return ExecutionResult(context.execution_id, False, message, status=Status.nodir)


def missing_executable(context: ExecutionContext) -> ExecutionResult:
    message = (
        f"Solver executable not found at: {context.executable}. "
        f"Please compile the solver first: {Config.recompile_cmd()}"
    )
    return ExecutionResult(context.execution_id, False, message, status=Status.noexe)


def timed_out(
    context: ExecutionContext,
    timeout: timedelta,
    output: str,
    output_files: Optional[Sequence[str]],
    elapsed: Optional[timedelta] = None,
) -> ExecutionResult:
    message = f"Execution timeout after {format_seconds(timeout)} seconds"
    return ExecutionResult(
        context.execution_id,
        False,
        message,
        output,
        _files(output_files),
        Status.tle,
        None,
        elapsed,
    )


def nonzero_exit(
    context: ExecutionContext,
    exit_code: int,
    output: str,
    output_files: Sequence[str],
    elapsed: Optional[timedelta] = None,
) -> ExecutionResult:
    message = (
        f"Solver exited with error code {exit_code}. Check output for details."
    )
    return ExecutionResult(
        context.execution_id,
        False,
        message,
        output,
        _files(output_files),
        Status.exc,
        exit_code,
        elapsed,
    )


def io_failure(
    context: ExecutionContext,
    e: OSError,
    output: Optional[str] = None,
    output_files: Optional[Sequence[str]] = None,
    exit_code: Optional[int] = None,
    elapsed: Optional[timedelta] = None,
) -> ExecutionResult:
    message = f"IO Error: {e}. Check if executable exists and has permissions."
    return ExecutionResult(
        context.execution_id,
        False,
        message,
        error_details(e) if output is None else output,
        _files(output_files),
        Status.io,
        exit_code,
        elapsed,
    )


def interrupted(
    context: ExecutionContext,
    e: BaseException,
    output: Optional[str] = None,
    output_files: Optional[Sequence[str]] = None,
    elapsed: Optional[timedelta] = None,
) -> ExecutionResult:
    message = "Execution interrupted" + (f": {e}" if str(e) else "")
    return ExecutionResult(
        context.execution_id,
        False,
        message,
        output,
        _files(output_files),
        Status.intr,
        None,
        elapsed,
    )


def unexpected_failure(
    context: ExecutionContext,
    e: Exception,
    output: Optional[str] = None,
    output_files: Optional[Sequence[str]] = None,
) -> ExecutionResult:
    details = error_details(e)
    return ExecutionResult(
        context.execution_id,
        False,
        f"Error: {e}",
        details if not output else f"{output}{details}\n",
        _files(output_files),
        Status.err,
    )
