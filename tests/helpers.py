"""Helpers to set up and inspect the files for a path directly."""

from __future__ import annotations

from os.path import exists

from atomicfile.paths import companion_paths

def make_files(path, target: bytes|None=None, temp: bytes|None=None, state: bool=False) -> None:
    """Creates the given combination of target, temp and state files for `path`."""
    f, t, s = companion_paths(path)
    for p, data in [(f, target), (t, temp), (s, b'' if state else None)]:
        if data is not None:
            with open(p, 'wb') as fh:
                fh.write(data)

def existing(path) -> tuple[bool, bool, bool]:
    """Returns which of (target, temp, state) exist for `path`."""
    return tuple(exists(p) for p in companion_paths(path)) # type: ignore[return-value]

def contents(path) -> bytes:
    with open(path, 'rb') as f:
        return f.read()
