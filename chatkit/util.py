"""Small helpers for command-line programs."""

from __future__ import annotations

import os
import sys
from typing import NoReturn


def out_dir(path: str) -> str:
    """Return the absolute path of an existing directory with a trailing '/'."""
    absolute = os.path.abspath(path)
    if not os.path.isdir(absolute):
        os.stat(absolute)
        raise NotADirectoryError(f"output directory {absolute} is not a directory")
    return absolute + "/"


def _program_name() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""


def exit_with_error(err: BaseException) -> NoReturn:
    """Report the error on stderr and exit with status -1."""
    print(f"{_program_name()} exit -1: {err!r}\n", file=sys.stderr)
    sys.exit(-1)


def sigterm_exit() -> str:
    """Report on stderr that the process received SIGTERM; return the warning."""
    message = f"Warning {_program_name()} receive process terminal SIGTERM exit 0"
    sys.stderr.write(message + "\n")
    sys.stderr.flush()
    return message