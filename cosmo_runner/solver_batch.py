# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
# Script that runs the solver on many configurations in parallel
import sys

from cosmo_runner.common.messages import Status, default_logger, info, infob
from cosmo_runner.common.parser.specifications import ArgsBatch
from cosmo_runner.common.tools_common import (
    execute_all,
    print_summary,
    read_configurations,
    setup_config,
    write_json,
)


def run(args: ArgsBatch) -> int:
    setup_config(args, ("solver", "quiet"))

    configurations = read_configurations(args.configs)
    infob(f"Running {len(configurations)} configuration(s) on {args.threads} thread(s)")
    results = execute_all(configurations, args.threads)

    if args.stats:
        print_summary(results)
    info("")
    info(str(default_logger.statistics))

    if args.json:
        write_json(args.json, [r.get_json() for r in results])

    if any(r.status == Status.intr for r in results):
        return 130
    return 0 if all(r.success for r in results) else 1


def main(args: ArgsBatch) -> None:
    sys.exit(run(args))
