# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
# Script that runs the solver on a single configuration
import sys

from cosmo_runner.common.messages import Status, default_logger, info, infod
from cosmo_runner.common.parser.specifications import ArgsRun
from cosmo_runner.common.programs.solver import Solver
from cosmo_runner.common.results import ExecutionResult
from cosmo_runner.common.tools_common import (
    print_result,
    read_configurations,
    setup_config,
    write_json,
)


def exit_code_for(result: ExecutionResult) -> int:
    if result.status == Status.intr:
        return 130
    return 0 if result.success else 1


def print_output_files(result: ExecutionResult) -> None:
    if not result.output_files:
        return
    info("Output files:")
    for file in result.output_files:
        infod(f"  {file}\n")


def run(args: ArgsRun) -> int:
    setup_config(args, ("solver", "quiet"))

    (configuration,) = read_configurations([args.config])
    result = Solver().execute(configuration)

    print_output_files(result)
    print_result(result)
    info(str(default_logger.statistics))

    if args.json:
        write_json(args.json, result.get_json())
    return exit_code_for(result)


def main(args: ArgsRun) -> None:
    sys.exit(run(args))
