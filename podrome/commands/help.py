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

from podrome.utils.context.namespace import CliNameSpace
from podrome.utils.context.context import CliContext
from podrome.utils.context.command import CliCommand


class Help(CliCommand):
    def description(self) -> str:
        return """Show detailed help information for podrome commands.

Use 'podrome <command> --help' for command-specific help.
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="podrome help",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        print("""
================================================================================
                         podrome - Pods prebuilder
================================================================================

USAGE:
    podrome <command> [options]

COMMANDS:
    build       Build all pods into XCFrameworks and stage them in Rome/
    clean       Remove build/, Rome/ and dSYM/
    help        Show this help

CONFIGURATION (Rome.toml):
    [project]
    path = "Pods/Pods.xcodeproj"
    sandbox_root = "Pods"

    [rome]
    configuration = "Debug"                      # build configuration
    enable_bitcode = false                       # BITCODE_GENERATION_MODE=bitcode
    dsym = true                                  # generate and collect dSYMs
    build_ios_catalyst = false                   # also build Mac Catalyst
    skipping_umbrella_targets_for_catalyst = []  # targets without catalyst
    run_in_x86_64 = false                        # arch -x86_64 xcodebuild
    build_all_targets = false                    # -alltargets per SDK
    create_xcframework = true                    # false stages .framework bundles
    clean_build_dir = false                      # remove build/ before building
    pre_compile = "hooks:pre_compile"            # module:function, optional
    post_compile = "hooks:post_compile"          # module:function, optional

    [[targets]]
    label = "Pods-App"
    platform = "ios"                             # ios, osx, tvos, watchos
    deployment_target = "13.0"

    [[targets.modules]]
    package = "Alamofire"
    module = "Alamofire"
    vendored_frameworks = []
    vendored_libraries = []
    resources = []

OUTPUT:
    Rome/{module}.xcframework
    dSYM/{iphoneos,iphonesimulator}/*.dSYM
""")
