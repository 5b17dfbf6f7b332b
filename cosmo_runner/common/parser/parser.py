# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
import argparse
from importlib.metadata import version
from typing import Sequence, Type

import argcomplete

import cosmo_runner.common.parser.specifications as specs
from cosmo_runner.common.parser.options import argument_options

GROUPS = ("actions", "locating", "verbosing", "running")


def MyHelpFormatterFactory(_full_mode: bool) -> Type[argparse.HelpFormatter]:
    class MyHelpFormatter(argparse.HelpFormatter):
        # options with help message starting with this prefix are considered secondary
        # secondary options are only printed in full help mode
        # primary options in full help mode are printed in bold
        mode_prefix = "[?]"
        full_mode = _full_mode

        def _format_action_invocation(self, action):
            if not action.option_strings:
                default = self._get_default_metavar_for_positional(action)
                (metavar,) = self._metavar_formatter(action, default)(1)
                return metavar

            else:
                options = sorted(action.option_strings, key=len)
                if len(options[0]) != 2:  # align long only options
                    options = ["  "] + options
                res = "  ".join(options)

                if action.nargs != 0:
                    default = self._get_default_metavar_for_optional(action)
                    args_string = self._format_args(action, default)
                    res += " " + args_string

                return res

        def _format_action(self, action):
            if action.help is None:
                return super()._format_action(action)
            orig_help = action.help
            issecondary = action.help.startswith(self.mode_prefix)
            if issecondary:
                action.help = action.help.removeprefix(self.mode_prefix).strip()
            res = ""
            if self.full_mode or not issecondary:
                res = super()._format_action(action)
            action.help = orig_help
            if self.full_mode and not issecondary:
                if res.endswith("\n"):
                    res = res[:-1]
                res = f"\033[1m{res}\033[0m\n"
            return res

    return MyHelpFormatter


def add_arguments(
    parser: argparse.ArgumentParser,
    fh_parser: argparse.ArgumentParser,
    arguments: Sequence[str],
) -> None:
    groups = {name: fh_parser.add_argument_group(name) for name in GROUPS}

    for arg in arguments:
        full_parser_group: (
            argparse.ArgumentParser | argparse._ArgumentGroup
        ) = fh_parser
        args, kwargs, group = argument_options.get(arg, (None, None, None))
        if args is None or kwargs is None:
            raise NameError(f"Unrecognized option {arg}")
        if group is not None and group:
            if group not in groups:
                raise NameError(f"Unrecognized group {group}")
            full_parser_group = groups[group]
        kwargs = dict(kwargs)
        if "default" in kwargs and "help" in kwargs:
            kwargs["help"] = kwargs["help"].format(kwargs["default"])
        full_parser_group.add_argument(*args, **kwargs)
        parser.add_argument(*args, **kwargs)


class UnifiedParser:
    def __init__(self):
        self.parser = argparse.ArgumentParser(
            "crun",
            description="Cosmo Runner -- Tool which runs the inflation solver "
            + "on model configurations and collects its output files.",
            formatter_class=MyHelpFormatterFactory(False),
        )
        self.parser.add_argument(
            "--version", action="version", version=version("cosmo-runner")
        )
        self.subparsers = self.parser.add_subparsers(dest="subcommand")

        self.alias_mapping: dict[str, str] = {}
        self.mapping: dict[str, tuple[argparse.ArgumentParser, type]] = {}

        self.add_subparser(
            "run",
            ("r",),
            specs.description_run,
            specs.short_description_run,
            specs.options_run,
            specs.ArgsRun,
        )
        self.add_subparser(
            "batch",
            ("b",),
            specs.description_batch,
            specs.short_description_batch,
            specs.options_batch,
            specs.ArgsBatch,
        )
        self.add_subparser(
            "locate",
            ("l",),
            specs.description_locate,
            specs.short_description_locate,
            specs.options_locate,
            specs.ArgsLocate,
        )
        self.add_subparser(
            "colortest",
            (),
            specs.description_colortest,
            specs.short_description_colortest,
            ["help"],
            argparse.Namespace,
        )

    def add_subparser(
        self,
        title: str,
        aliases: Sequence[str],
        description: str,
        short_description: str,
        arguments: list[str],
        container: type,
    ) -> None:
        parser = self.subparsers.add_parser(
            name=title,
            help=short_description,
            aliases=aliases,
            description=description,
            formatter_class=MyHelpFormatterFactory(False),
            add_help=False,
        )
        fh_parser = argparse.ArgumentParser(
            description=description,
            formatter_class=MyHelpFormatterFactory(True),
            add_help=False,
        )
        add_arguments(parser, fh_parser, arguments)

        for name in (title, *aliases):
            self.alias_mapping[name] = title
        self.mapping[title] = (fh_parser, container)

    def parse(self, argv: Sequence[str] | None = None) -> tuple[str, specs.Args]:
        argcomplete.autocomplete(self.parser)
        args = self.parser.parse_args(argv)
        subcommand = args.subcommand
        if subcommand is None:
            self.parser.print_help()
            quit(0)
        if subcommand not in self.alias_mapping:
            raise NameError(f"Unrecognized subcommand {subcommand}")
        subcommand = self.alias_mapping[subcommand]
        (fh_parser, container) = self.mapping[subcommand]
        delattr(args, "subcommand")
        args = container(**vars(args))
        if hasattr(args, "full_help") and args.full_help:
            fh_parser.print_help()
            quit(0)
        return subcommand, args
