"""Writing files so that a crash at any point leaves either the old or the new contents.

Which protocol we use depends on whether the target exists once the path has been cleaned.

If the target exists:
    step                                files after step
    0. start                            F
    1. write + flush new data into T    F T     (crash: clean deletes T, old F stays)
    2. delete F                         T       (crash: clean promotes T, new data wins)
    3. rename T -> F                    F

If the target doesn't exist:
    step                                files after step
    0. start                            -
    1. create + flush empty S           S       (crash: clean deletes S)
    2. write + flush new data into T    T S     (crash: clean deletes T then S)
    3. delete S                         T       (crash: clean promotes T, new data wins)
    4. rename T -> F                    F

The state file is only needed in the second case: without it, a lone T could be either a
committed write or one that was interrupted before its data was fully flushed. Deleting S is the
commit point.

No step is retried here. If anything fails, the error propagates and the files are left in one of
the configurations above, so simply calling the write again (or clean/read) recovers.
"""

from __future__ import annotations

import logging
import os

from os.path import isfile
from typing import Iterable

from atomicfile.clean import clean
from atomicfile.constants import DEFAULT_ENCODING, DURABLE_DIRS
from atomicfile.file_utils import _create_marker, _delete, _rename, _write_flushed
from atomicfile.paths import PathT, companion_paths, verify_writable

logger = logging.getLogger(__name__)


def _write_target_exists(target: str, temp: str, data: bytes, durable: bool) -> None:
    _write_flushed(temp, data, durable=durable)
    _delete(target, durable=durable)
    _rename(temp, target, durable=durable)

def _write_target_absent(target: str, temp: str, state: str, data: bytes, durable: bool) -> None:
    _create_marker(state, durable=durable)
    _write_flushed(temp, data, durable=durable)
    _delete(state, durable=durable)
    _rename(temp, target, durable=durable)

def write_all_bytes(path: PathT, data: bytes|bytearray|memoryview, durable: bool|None=None) -> None:
    """Atomically replaces the contents of `path` with `data`, creating it if needed.

    Raises `InvalidTarget` (before touching anything) if `path` is a directory. Filesystem errors
    propagate unchanged. If `durable` is True (default from `DURABLE_DIRS`), the parent directory
    is also flushed after each delete and rename.
    """
    if isinstance(data, str):
        raise TypeError('data must be bytes-like, not str; use write_all_text() for text')
    data = bytes(data)
    if durable is None:
        durable = DURABLE_DIRS
    verify_writable(path)
    target, temp, state = companion_paths(path)
    clean(target, durable=durable)
    if isfile(target):
        logger.debug(f'Overwriting {target} with {len(data)} bytes')
        _write_target_exists(target, temp, data, durable)
    else:
        logger.debug(f'Creating {target} with {len(data)} bytes')
        _write_target_absent(target, temp, state, data, durable)

def write_all_text(path: PathT, text: str, encoding: str=DEFAULT_ENCODING, durable: bool|None=None) -> None:
    """Atomically writes `text` to `path` using the given `encoding`."""
    write_all_bytes(path, text.encode(encoding), durable=durable)

def write_all_lines(path: PathT,
                    lines: Iterable[str],
                    encoding: str=DEFAULT_ENCODING,
                    durable: bool|None=None) -> None:
    """Atomically writes `lines` to `path`, joined by `os.linesep` (with no trailing separator)."""
    write_all_text(path, os.linesep.join(lines), encoding=encoding, durable=durable)

def delete(path: PathT, durable: bool|None=None) -> bool:
    """Cleans `path` and then deletes the target if it exists, returning whether it did."""
    if durable is None:
        durable = DURABLE_DIRS
    verify_writable(path)
    if not clean(path, durable=durable).target:
        return False
    _delete(os.fspath(path), durable=durable)
    return True
