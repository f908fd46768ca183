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

"""Build steps turning a Pods project into frameworks and XCFrameworks."""

__all__ = [
    "build_rome",
    "build_utils",
    "dsym",
    "merge_frameworks",
    "sdk_matrix",
    "staging",
    "xcframework",
    "xcodebuild",
]
