# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
import os
from typing import Optional

from cosmo_runner.common.commands import Config
from cosmo_runner.common.messages import Logger, default_logger


def get_possible_locations_of_solver(cwd: str) -> list[str]:
    cwd = os.path.abspath(cwd)
    solver = os.path.join(Config.solver_dir, Config.solver_name)
    possibilities = [
        os.path.normpath(os.path.join(cwd, os.pardir, solver)),
        os.path.join(cwd, solver),
    ]
    if os.path.basename(cwd) == Config.backend_dir:
        possibilities.append(os.path.join(os.path.dirname(cwd), solver))
    # keep unique in original order
    return list(dict.fromkeys(possibilities))


def try_possible_locations_of_solver(
    possibilities: list[str], logger: Logger = default_logger
) -> Optional[str]:
    for path in possibilities:
        logger.infod(f"Checking path: {path}\n")
        if os.path.exists(path):
            logger.info(f"Found executable at: {path}")
            return path
    return None


def locate_solver(cwd: Optional[str] = None, logger: Logger = default_logger) -> str:
    """
    Path of the solver executable as seen from `cwd` (current directory by
    default). When none of the candidates exists, the first one is returned
    so that it can be shown in an error message.
    """
    if Config.solver:
        return os.path.abspath(Config.solver)
    cwd = os.getcwd() if cwd is None else cwd
    logger.infod(f"Current working directory: {cwd}\n")
    possibilities = get_possible_locations_of_solver(cwd)
    found = try_possible_locations_of_solver(possibilities, logger)
    return possibilities[0] if found is None else found
