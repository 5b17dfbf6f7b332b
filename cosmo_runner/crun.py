#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
# © 2024 fezjo
# Unified script for cosmo-runner
import os
import sys

import cosmo_runner.common.parser.parser as crun_parser


def run_run(args: crun_parser.specs.ArgsRun):
    from cosmo_runner.solver_run import main

    main(args)


def run_batch(args: crun_parser.specs.ArgsBatch):
    from cosmo_runner.solver_batch import main

    main(args)


def run_locate(args: crun_parser.specs.ArgsLocate):
    from cosmo_runner.common.commands import Config
    from cosmo_runner.common.messages import error, infog
    from cosmo_runner.common.programs.locator import locate_solver
    from cosmo_runner.common.tools_common import setup_config

    setup_config(args, ("solver",))
    path = locate_solver()
    if os.path.exists(path):
        infog(f"Solver: {path}")
    else:
        error(
            f"Solver not found, expected at {path}. "
            f"Compile it with: {Config.recompile_cmd()}"
        )
        sys.exit(1)


def run_colortest(args: crun_parser.specs.ArgsGeneric):
    from cosmo_runner.common.messages import color_test

    color_test()


def main():
    unified_parser = crun_parser.UnifiedParser()
    subcommand, args = unified_parser.parse()
    subcommand_funcs = {
        "run": run_run,
        "batch": run_batch,
        "locate": run_locate,
        "colortest": run_colortest,
    }
    subcommand_funcs[subcommand](args)


if __name__ == "__main__":
    main()
