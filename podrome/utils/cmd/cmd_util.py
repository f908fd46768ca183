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

import shlex
import subprocess
import time
from threading import Timer

# xcodebuild of a large Pods project can take a long time
DEFAULT_TIMEOUT_SECOND = 3 * 3600


def decode_bytes(data: bytes) -> str:
    if not data:
        return ""
    try:
        return bytes.decode(data, "UTF-8")
    except UnicodeDecodeError:
        return bytes.decode(data, "UTF-8", errors="replace")


def format_command(command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(shlex.quote(str(x)) for x in command)


def exec_command(command, cwd=None):
    # timeout is 3 hours
    return exec_command_with_timeout_second(command, DEFAULT_TIMEOUT_SECOND, cwd=cwd)


def exec_command_with_timeout_second(
    command,
    timeout_second=DEFAULT_TIMEOUT_SECOND,
    cwd=None,
    stdout=subprocess.PIPE,
    stderr=subprocess.STDOUT,
):
    """
    Run a command (argument list or shell string) and capture its output.

    Returns:
        tuple: (err_code, err_msg) where err_msg is the combined stdout/stderr
    """
    start_mills = int(time.time() * 1000)
    compile_popen = subprocess.Popen(
        command,
        shell=isinstance(command, str),
        cwd=cwd,
        stdout=stdout,
        stderr=stderr,
    )
    timer = Timer(timeout_second, lambda process: process.kill(), [compile_popen])
    try:
        timer.start()
        out, err = compile_popen.communicate()
    finally:
        timer.cancel()
    err_code = compile_popen.returncode
    err_msg = decode_bytes(out)
    if err_code == -9:
        if not err_msg:
            err_msg = decode_bytes(err)
            if not err_msg:
                use_time = int(time.time() * 1000) - start_mills
                err_msg = f"Failed for timeout({err_code}), use_time: {use_time}ms"
    return err_code, err_msg
