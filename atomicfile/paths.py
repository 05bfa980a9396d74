"""Naming of the files that together make up one atomically-written file.

Each logical file `path` is backed by up to three files on disk, all living in the same directory:
- the target itself (`path`), which holds the committed contents
- a temp file (`path` + `TEMP_SUFFIX`), which holds the in-flight contents during a write
- a state file (`path` + `STATE_SUFFIX`), an empty marker meaning "a write started while the
  target did not exist yet"

The suffix is always appended, never swapped for an existing extension, so `a.txt` maps to
`a.txt.tmp` and `a.txt.stt`.
"""

from __future__ import annotations

import os

from os.path import isdir
from typing import Union

from atomicfile.constants import TEMP_SUFFIX, STATE_SUFFIX, InvalidTarget

PathT = Union[str, os.PathLike]

# maps from file type to the suffix for that type
SUFFIXES = {
    'target': '',
    'temp': TEMP_SUFFIX,
    'state': STATE_SUFFIX,
}


def translate_path(path: PathT, type_name: str) -> str:
    """Returns the path of the given `type_name` (one of `SUFFIXES`) for target `path`."""
    return os.fspath(path) + SUFFIXES[type_name]

def temp_path(path: PathT) -> str:
    return translate_path(path, 'temp')

def state_path(path: PathT) -> str:
    return translate_path(path, 'state')

def companion_paths(path: PathT) -> tuple[str, str, str]:
    """Returns `(target, temp, state)` paths for the given target `path`."""
    return (translate_path(path, 'target'), temp_path(path), state_path(path))

def verify_writable(path: PathT) -> None:
    """Raises `InvalidTarget` if `path` is an existing directory."""
    if isdir(path):
        raise InvalidTarget(os.fspath(path))
