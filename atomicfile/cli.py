"""Command-line tools for inspecting and repairing atomically-written files.

Usage: python -m atomicfile <func> <path> [options], where func is one of:
- status: print which files exist, without changing anything
- clean: recover from any interrupted write
- read: write the valid contents to stdout
- write: atomically write stdin (or --text) to the path
"""

from __future__ import annotations

import logging
import sys

from argparse import ArgumentParser
from typing import Any, Callable, Sequence

import termcolor

from atomicfile.clean import clean as _clean
from atomicfile.constants import AtomicFileError
from atomicfile.read import read_all_bytes
from atomicfile.state import FileState, classify
from atomicfile.write import write_all_bytes, write_all_text


def _colored_state(state: FileState) -> str:
    return termcolor.colored(str(state), 'green' if state.is_canonical else 'yellow')

def status(path: str, **kw) -> int:
    """Prints the current configuration of `path`."""
    print(f'{path}: {_colored_state(classify(path))}')
    return 0

def clean(path: str, **kw) -> int:
    """Cleans `path` and prints the resulting configuration."""
    print(f'{path}: {_colored_state(_clean(path))}')
    return 0

def read(path: str, **kw) -> int:
    """Writes the valid contents of `path` to stdout."""
    sys.stdout.buffer.write(read_all_bytes(path))
    sys.stdout.buffer.flush()
    return 0

def write(path: str, text: str|None=None, **kw) -> int:
    """Atomically writes `text` (or all of stdin if not given) to `path`."""
    if text is not None:
        write_all_text(path, text)
    else:
        write_all_bytes(path, sys.stdin.buffer.read())
    return 0

FUNCS: list[Callable[..., int]] = [status, clean, read, write]


def main(argv: Sequence[str]|None=None) -> int:
    funcs = {f.__name__: f for f in FUNCS}
    parser = ArgumentParser(description=__doc__)
    parser.add_argument('func', choices=funcs, help=f"Function to run [{', '.join(funcs)}]")
    parser.add_argument('path', help='Target file path')
    parser.add_argument('-t', '--text', default=None, help='Text to write (for write; default: stdin)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log at debug level')
    args = parser.parse_args(argv)
    kwargs: dict[str, Any] = vars(args)
    logging.basicConfig(level=logging.DEBUG if kwargs.pop('verbose') else logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    func = funcs[kwargs.pop('func')]
    try:
        return func(**kwargs)
    except AtomicFileError as e:
        print(termcolor.colored(f'Error: {e}', 'red'), file=sys.stderr)
        return 1
