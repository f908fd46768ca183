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

from podrome.errors import BuildCommandError, RomeError
from podrome.build_scripts.build_rome import build_rome
from podrome.utils.cmd.cmd_util import exec_command
from podrome.utils.context.namespace import CliNameSpace
from podrome.utils.context.context import CliContext
from podrome.utils.context.command import CliCommand
from podrome.utils.context.result import CliResult


class Build(CliCommand):
    def __init__(self, runner=exec_command):
        self.runner = runner

    def description(self) -> str:
        return """Build all pods of the Pods project into frameworks.

Reads Rome.toml from the current directory, builds every umbrella target
for each SDK of its platform, creates one XCFramework per pod module in
Rome/ and copies vendored frameworks, libraries and resources next to them.

EXAMPLES:
    podrome build
    podrome build --configuration Release
    podrome build --catalyst --skip-catalyst Pods-Widget
    podrome build --no-xcframework      # stage merged .framework bundles
    podrome build --x86_64              # run xcodebuild under Rosetta

Command line options override the [rome] table of Rome.toml.
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="podrome build",
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
            "--configuration",
            type=str,
            default=None,
            help="build configuration, e.g. Debug or Release",
        )
        parser.add_argument(
            "--enable-bitcode",
            action="store_true",
            default=None,
            help="append BITCODE_GENERATION_MODE=bitcode",
        )
        parser.add_argument(
            "--no-dsym",
            action="store_true",
            help="do not generate and collect dSYM files",
        )
        parser.add_argument(
            "--catalyst",
            action="store_true",
            default=None,
            help="also build iOS targets for Mac Catalyst",
        )
        parser.add_argument(
            "--skip-catalyst",
            type=str,
            default=None,
            help="comma-separated umbrella targets not built for Mac Catalyst",
        )
        parser.add_argument(
            "--x86_64",
            dest="run_in_x86_64",
            action="store_true",
            default=None,
            help="run xcodebuild with 'arch -x86_64'",
        )
        parser.add_argument(
            "--all-targets",
            action="store_true",
            default=None,
            help="build with -alltargets instead of one scheme per umbrella target",
        )
        parser.add_argument(
            "--no-xcframework",
            action="store_true",
            help="copy merged .framework bundles instead of creating XCFrameworks",
        )
        parser.add_argument(
            "--clean",
            action="store_true",
            default=None,
            help="remove the build directory before building",
        )
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv)
        return args

    def apply_overrides(self, config, args: CliNameSpace):
        skipping = None
        if args.skip_catalyst:
            skipping = [x.strip() for x in args.skip_catalyst.split(",") if x.strip()]
        return config.replace(
            configuration=args.configuration,
            enable_bitcode=args.enable_bitcode,
            dsym=False if args.no_dsym else None,
            build_ios_catalyst=args.catalyst,
            skipping_umbrella_targets_for_catalyst=skipping,
            run_in_x86_64=args.run_in_x86_64,
            build_all_targets=args.all_targets,
            create_xcframework=False if args.no_xcframework else None,
            clean_build_dir=args.clean,
        )

    def build(self, context: CliContext, args: CliNameSpace) -> CliResult:
        try:
            snapshot, config = context.load(args.config)
            config = self.apply_overrides(config, args)
            return CliResult.success(build_rome(snapshot, config, runner=self.runner))
        except RomeError as e:
            return CliResult.failure(e)

    def print_error(self, error: RomeError):
        print(f"ERROR: {error}")
        if isinstance(error, BuildCommandError) and error.output:
            print("--- output ---")
            print(error.output.rstrip())

    def exec(self, context: CliContext, args: CliNameSpace):
        result = self.build(context, args)
        if result.is_failure():
            self.print_error(result.get_error())
            sys.exit(result.exit_code)
