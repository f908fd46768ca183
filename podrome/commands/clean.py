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
import argparse

from podrome.errors import RomeError
from podrome.build_scripts.build_utils import remove_path
from podrome.utils.context.namespace import CliNameSpace
from podrome.utils.context.context import CliContext
from podrome.utils.context.command import CliCommand


class Clean(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to clean podrome outputs.

        Cleans the following directories next to the Pods sandbox:
        - build/                  # xcodebuild build directory
        - Rome/                   # staged frameworks and resources
        - dSYM/                   # collected debug symbols

        Examples:
            podrome clean              # Remove all outputs
            podrome clean --dry-run    # Preview what will be removed
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="podrome clean",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "--config",
            type=str,
            default=None,
            help="path of Rome.toml (default: ./Rome.toml)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be cleaned without actually deleting",
        )
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv)
        return args

    def clean(self, context: CliContext, args: CliNameSpace) -> list:
        """
        Remove the build, Rome and dSYM directories.

        Returns:
            list: directories removed (or that would be removed in dry-run)
        """
        snapshot, _ = context.load(args.config)

        removed = []
        for path in (snapshot.build_dir, snapshot.rome_dir, snapshot.dsym_dir):
            if not path.exists():
                print(f"  {path.name}/ does not exist")
                continue
            if args.dry_run:
                print(f"  [DRY RUN] Would remove: {path}")
            else:
                remove_path(path)
                print(f"  Removed: {path}")
            removed.append(path)
        return removed

    def exec(self, context: CliContext, args: CliNameSpace):
        print("Cleaning podrome outputs...\n")
        try:
            self.clean(context, args)
        except RomeError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
