# © 2024 fezjo
from typing import Any, Type, TypedDict


class ParserOptions(TypedDict, total=False):
    action: str
    const: Any
    dest: str
    default: Any
    help: str
    metavar: str
    nargs: str
    type: Type[Any]


argument_options: dict[str, tuple[tuple[str, ...], ParserOptions, str | None]] = {
    # actions
    "help": (
        ("-h", "--help"),
        {
            "action": "help",
            "help": "show compact help message and exit",
        },
        "actions",
    ),
    "full_help": (
        ("--help-all",),
        {
            "dest": "full_help",
            "action": "store_true",
            "help": "show help message with all the available options and exit",
        },
        "actions",
    ),
    # locating
    "solver": (
        ("-s", "--solver"),
        {
            "dest": "solver",
            "default": None,
            "metavar": "PATH",
            "help": "[?] solver executable to use instead of searching "
            + "for spare/m.exe around the current directory",
        },
        "locating",
    ),
    # verbosing
    "colorful": (
        ("--boring",),
        {
            "dest": "colorful",
            "action": "store_false",
            "help": "[?] turn colors off",
        },
        "verbosing",
    ),
    "quiet": (
        ("-q", "--quiet"),
        {
            "dest": "quiet",
            "action": "store_true",
            "help": "don't echo what the solver prints",
        },
        "verbosing",
    ),
    "nostats": (
        ("--no-statistics",),
        {
            "dest": "stats",
            "action": "store_false",
            "help": "[?] don't print statistics",
        },
        "verbosing",
    ),
    "json": (
        ("--json",),
        {
            "dest": "json",
            "default": None,
            "metavar": "FILE",
            "help": "[?] also write results in json format to file",
        },
        "verbosing",
    ),
    # running
    "timeout": (
        ("-t", "--timeout"),
        {
            "dest": "timeout",
            "default": 600.0,
            "type": float,
            "metavar": "SECONDS",
            "help": "kill the solver after this many seconds, "
            + "0 means unlimited (default: {})",
        },
        "running",
    ),
    "threads": (
        ("-j", "--threads"),
        {
            "dest": "threads",
            "default": 2,
            "type": int,
            "metavar": "NUM",
            "help": "how many solvers to run at once (default: {})",
        },
        "running",
    ),
    # target
    "config": (
        ("config",),
        {
            "help": "json file with the model and initial conditions",
        },
        None,
    ),
    "configs": (
        ("configs",),
        {
            "nargs": "+",
            "help": "json files with the model and initial conditions",
        },
        None,
    ),
}
