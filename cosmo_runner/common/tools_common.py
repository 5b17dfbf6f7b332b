# © 2023 fezjo
import json
import os
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Iterable, Sequence, Union

from cosmo_runner.common.commands import Config
from cosmo_runner.common.configuration import Configuration, load_configuration
from cosmo_runner.common.messages import (
    Color,
    ParallelLoggerManager,
    default_logger,
    fatal,
    info,
    plain,
    serialize_for_json,
    stylized_tqdm,
    warning,
)
from cosmo_runner.common.parser.specifications import ArgsBatch, ArgsLocate, ArgsRun
from cosmo_runner.common.programs.solver import Solver
from cosmo_runner.common.results import ExecutionResult, get_statistics_header


def setup_config(
    args: Union[ArgsRun, ArgsBatch, ArgsLocate], config_keys: Iterable[str]
) -> None:
    Color.setup(args.colorful)

    for key in config_keys:
        setattr(Config, key, getattr(args, key))

    if hasattr(args, "timeout"):
        if args.timeout < 0:
            fatal(f"Timeout must not be negative, got {args.timeout}")
        Config.timeout = timedelta(seconds=args.timeout)
    if not Config.solver:
        Config.solver = None


def read_configurations(files: Sequence[str]) -> list[Configuration]:
    configurations: list[Configuration] = []
    for file in files:
        if not os.path.isfile(file):
            fatal(f"Configuration file '{file}' not found")
        try:
            configurations.append(load_configuration(file))
        except (OSError, ValueError) as e:
            fatal(f"Invalid configuration '{file}': {e}")
    return configurations


def execute_all(
    configurations: Sequence[Configuration], threads: int
) -> list[ExecutionResult]:
    """
    Run all configurations concurrently. Each run logs into its own sink,
    sinks are printed in submission order once the run has finished.
    On interrupt all running solvers are killed and the remaining runs
    are reported as interrupted.
    """
    parallel_logger_manager = ParallelLoggerManager()
    solver = Solver()
    results: list[ExecutionResult] = []

    def wait_for(future: Future[ExecutionResult]) -> ExecutionResult:
        try:
            return future.result()
        except KeyboardInterrupt:
            warning("Interrupted, killing running solvers")
            solver.kill_all()
            return future.result()

    with stylized_tqdm(desc="Running", total=len(configurations)) as progress_bar:
        with ThreadPoolExecutor(max_workers=max(1, threads)) as executor:
            futures = [
                executor.submit(solver.execute, conf, parallel_logger_manager.get_sink())
                for conf in configurations
            ]
            for future in futures:
                future.add_done_callback(lambda _: progress_bar.update(1))
            for future, logger in zip(futures, parallel_logger_manager.sinks):
                result = wait_for(future)
                progress_bar.clear()
                plain(parallel_logger_manager.collect(logger))
                print_result(result)
                progress_bar.display()
                results.append(result)
    default_logger.statistics += parallel_logger_manager.statistics
    return results


def print_result(result: ExecutionResult) -> None:
    if result.success:
        default_logger.infog(result.message)
    else:
        default_logger.error(result.message)


def print_summary(results: Sequence[ExecutionResult]) -> None:
    info("")
    info(get_statistics_header())
    for r in results:
        info(r.get_statistics())


def write_json(path: str, data: Any) -> None:
    with open(path, "w") as f:
        json.dump(data, f, default=serialize_for_json)
