#
# Copyright 2024 podrome Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

import os
import sys
import importlib
import argparse

from podrome.utils.context.namespace import CliNameSpace
from podrome.utils.context.context import CliContext
from podrome.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """podrome - prebuild CocoaPods into frameworks and XCFrameworks

USAGE:
    podrome <command> [options]

COMMANDS:
    build       Build all pods and stage them in Rome/
    clean       Remove build/, Rome/ and dSYM/
    help        Show detailed help information

EXAMPLES:
    podrome build                        # Build with ./Rome.toml
    podrome build --configuration Release
    podrome clean --dry-run

For more information on a specific command:
    podrome <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if not command.startswith("_") and command.endswith(".py"):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def parser(self, add_help=True) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="podrome",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?' if not add_help else None,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        if argv is None:
            argv = sys.argv[1:]
        # podrome --help, but not podrome build --help
        if len(argv) == 1 and argv[0] in ['--help', '-h']:
            self.parser().print_help()
            sys.exit(0)

        # parse only known args - this will NOT consume --help of a subcommand
        args, unknown = self.parser(add_help=False).parse_known_args(argv)
        return args

    def load_command(self, name: str) -> CliCommand:
        module = importlib.import_module(f"{PACKAGE_NAME}.commands.{name}")
        klass = getattr(module, name.capitalize())
        return klass()

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self.parser().print_help()
            sys.exit(1)

        sub_cmd = self.load_command(args.subcommand)
        sub_cmd.exec(context, sub_cmd.cli())


def main():
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli())


if __name__ == "__main__":
    main()
