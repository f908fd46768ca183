#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_utils.py
# podrome
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

"""
Filesystem helpers shared by the framework build steps.

All copies follow the same rule: the destination is removed first, so a
later copy of the same bundle always wins.
"""

import os
import shutil
import time
from pathlib import Path


def remove_path(path):
    """
    Remove a file, symlink or directory tree if it exists.

    Returns:
        bool: True if something was removed
    """
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def clean(path):
    """Remove a directory and recreate it empty."""
    remove_path(path)
    os.makedirs(path, exist_ok=True)


def copy_file(src, dst):
    """
    Copy a file or directory to dst, replacing whatever is at dst.

    Args:
        src: Source file or directory path
        dst: Full destination path (not the parent directory)

    Returns:
        Path: the destination path
    """
    src = Path(src)
    dst = Path(dst)
    os.makedirs(dst.parent, exist_ok=True)
    remove_path(dst)
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)
    return dst


def copy_into(src, dst_dir):
    """Copy src into dst_dir keeping its basename (like cp -r src dst_dir/)."""
    return copy_file(src, Path(dst_dir) / Path(src).name)


def unique(items):
    """De-duplicate while keeping the first occurrence order."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def relative_display_path(path, start=None):
    try:
        return os.path.relpath(path, start or os.getcwd())
    except ValueError:
        # different drive on windows
        return str(path)


def format_elapsed(before_time):
    return f"use time: {int(time.time() - before_time)} s"
