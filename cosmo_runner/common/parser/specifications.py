# © 2024 fezjo
from argparse import Namespace
from dataclasses import dataclass
from typing import Union

ArgsGeneric = Namespace

description_run = """
Run the solver.
Write the configuration into a fresh input file, run the solver on it
and report which output files it produced.
"""
short_description_run = "Run the solver on one configuration."
options_run = [
    "help",
    "full_help",
    "solver",
    "timeout",
    "colorful",
    "quiet",
    "json",
    "config",
]


@dataclass
class ArgsRun:
    full_help: bool
    solver: Union[str, None]
    timeout: float
    colorful: bool
    quiet: bool
    json: Union[str, None]
    config: str


description_batch = """
Run the solver on many configurations.
Every configuration gets its own input file and output directory,
so the runs are executed in parallel.
"""
short_description_batch = "Run the solver on many configurations in parallel."
options_batch = [
    "help",
    "full_help",
    "solver",
    "timeout",
    "colorful",
    "quiet",
    "nostats",
    "json",
    "threads",
    "configs",
]


@dataclass
class ArgsBatch:
    full_help: bool
    solver: Union[str, None]
    timeout: float
    colorful: bool
    quiet: bool
    stats: bool
    json: Union[str, None]
    threads: int
    configs: list[str]


description_locate = """
Locate the solver.
Print the paths where the solver executable is searched for
and the one which would be used.
"""
short_description_locate = "Show where the solver executable is searched for."
options_locate = [
    "help",
    "full_help",
    "solver",
    "colorful",
]


@dataclass
class ArgsLocate:
    full_help: bool
    solver: Union[str, None]
    colorful: bool


description_colortest = """
Test colors.
Test color support of terminal by printing all of them and exit.
"""
short_description_colortest = "Test colors by printing all of them and exit."


Args = Union[ArgsGeneric, ArgsRun, ArgsBatch, ArgsLocate]
