# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
from __future__ import annotations

import os
import signal
import subprocess
import threading
import time
from datetime import timedelta
from typing import Optional, TextIO

from cosmo_runner.common import results
from cosmo_runner.common.commands import Config, format_seconds
from cosmo_runner.common.configuration import Configuration
from cosmo_runner.common.context import ExecutionContext, allocate_context
from cosmo_runner.common.input_file import write_input_file
from cosmo_runner.common.messages import Logger, default_logger
from cosmo_runner.common.outputs import collect_output_files
from cosmo_runner.common.programs.locator import locate_solver
from cosmo_runner.common.results import ExecutionResult

# how long to wait for the output reader after the process is gone
DRAIN_GRACE = timedelta(seconds=5)


def kill_process_group(process: subprocess.Popen) -> None:
    """Kill the solver together with everything it started in its session."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        # the whole group has already exited
        pass


class Solver:
    """
    Runs the pre-compiled solver, one subprocess per `execute` call.

    Every call gets a fresh execution context, so calls from several threads
    never share input files or output directories. The solver location is
    looked up again on every call unless `path` is given.

    Each solver is started in a new session. When it exits, times out or is
    interrupted, its whole process group is killed, so children which keep
    the output pipe open can't hold the call up.
    Thread safe, `kill_all` stops the runs of all threads.
    """

    def __init__(self, path: Optional[str] = None, timeout: Optional[timedelta] = None):
        self.path = path
        self.timeout: timedelta = Config.timeout if timeout is None else timeout
        self.quiet: bool = Config.quiet
        self.lock = threading.Lock()
        self.processes: dict[str, subprocess.Popen] = {}
        self.killed = False

    def kill_all(self) -> None:
        """Kill all running solvers, runs which haven't started yet won't start."""
        with self.lock:
            self.killed = True
            processes = list(self.processes.values())
        for process in processes:
            kill_process_group(process)

    def _register(self, execution_id: str, process: subprocess.Popen) -> None:
        with self.lock:
            self.processes[execution_id] = process
            killed = self.killed
        if killed:
            kill_process_group(process)

    def _unregister(self, execution_id: str) -> None:
        with self.lock:
            self.processes.pop(execution_id, None)

    def resolve_executable(self, logger: Logger) -> str:
        if self.path is not None:
            return os.path.abspath(self.path)
        return locate_solver(logger=logger)

    def check_preconditions(
        self, context: ExecutionContext, logger: Logger
    ) -> Optional[ExecutionResult]:
        if not os.path.isdir(context.workdir):
            result = results.missing_workdir(context)
            logger.error(result.message)
            return result
        if not os.path.exists(context.executable):
            result = results.missing_executable(context)
            logger.error(result.message)
            return result
        if not os.access(context.executable, os.X_OK):
            logger.warning(
                f"Executable may not have execute permissions: {context.executable}"
            )
        return None

    def execute(
        self, conf: Configuration, logger: Optional[Logger] = None
    ) -> ExecutionResult:
        logger = default_logger if logger is None else logger
        context = allocate_context(self.resolve_executable(logger))
        logger.infob(f"Starting solver execution with ID: {context.execution_id}")
        logger.info(f"Work directory: {context.workdir}")
        logger.info(f"Input file: {context.input_file}")
        logger.info(f"Output directory: {context.output_dir}")

        failure = self.check_preconditions(context, logger)
        if failure is not None:
            return failure
        if self.killed:
            logger.warning("Solver runs were interrupted, not starting")
            return results.interrupted(context, KeyboardInterrupt())

        console: list[str] = []
        try:
            try:
                os.makedirs(context.output_dir, exist_ok=True)
                write_input_file(context.input_file, conf)
            except OSError as e:
                logger.error(f"IO Error while staging input: {e!r}")
                return results.io_failure(context, e)
            return self._supervise(context, console, logger)
        except Exception as e:
            logger.error(f"Unexpected error executing solver: {e!r}")
            return results.unexpected_failure(context, e, "".join(console))

    def _supervise(
        self, context: ExecutionContext, console: list[str], logger: Logger
    ) -> ExecutionResult:
        start = time.monotonic()

        def elapsed() -> timedelta:
            return timedelta(seconds=time.monotonic() - start)

        try:
            returncode = self._run(context, console, logger)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"Solver killed after {format_seconds(self.timeout)} seconds"
            )
            partial_files = None
            try:
                partial_files = collect_output_files(context.output_dir, logger)
            except OSError as e:
                logger.warning(f"Could not collect partial output: {e!r}")
            return results.timed_out(
                context, self.timeout, "".join(console), partial_files, elapsed()
            )
        except KeyboardInterrupt as e:
            logger.error("Interrupted while executing solver")
            return results.interrupted(context, e, "".join(console), None, elapsed())
        except OSError as e:
            logger.error(f"IO Error executing solver: {e!r}")
            return results.io_failure(context, e, elapsed=elapsed())

        took = elapsed()
        output = "".join(console)
        if self.killed and returncode == -signal.SIGKILL:
            logger.error("Solver was killed because the runs were interrupted")
            return results.interrupted(context, KeyboardInterrupt(), output, None, took)
        try:
            output_files = collect_output_files(context.output_dir, logger)
        except OSError as e:
            logger.error(f"Error collecting output files: {e!r}")
            return results.io_failure(context, e, output, None, returncode, took)

        if returncode == 0:
            return results.succeeded(context, output, output_files, took)
        logger.warning(f"Solver exited with code {returncode}")
        return results.nonzero_exit(context, returncode, output, output_files, took)

    def _run(
        self, context: ExecutionContext, console: list[str], logger: Logger
    ) -> int:
        """raises TimeoutExpired after the process has been killed"""
        cmd = [context.executable, context.input_file]
        logger.infob(f"Executing: {' '.join(cmd)}")
        timeout = self.timeout.total_seconds() or None
        with subprocess.Popen(
            cmd,
            cwd=context.workdir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=True,
        ) as process:
            assert process.stdout is not None
            self._register(context.execution_id, process)
            reader = threading.Thread(
                target=self._drain,
                args=(process.stdout, console, logger),
                daemon=True,
            )
            reader.start()
            try:
                return process.wait(timeout=timeout)
            finally:
                # leftovers of a finished solver go too, they hold the pipe open
                kill_process_group(process)
                process.wait()
                self._unregister(context.execution_id)
                reader.join(DRAIN_GRACE.total_seconds())

    def _drain(self, stream: TextIO, console: list[str], logger: Logger) -> None:
        try:
            for line in stream:
                console.append(line)
                if not self.quiet:
                    logger.infod(line)
        except (OSError, ValueError):
            # stream closed under the reader
            return
