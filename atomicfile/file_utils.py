"""Low-level filesystem primitives.

Each of these is a single filesystem step; the crash-safety of the higher-level protocols relies
on every write being flushed to storage before the next step runs.
"""

from __future__ import annotations

import logging
import os

from os.path import abspath, dirname

logger = logging.getLogger(__name__)


def _fsync_dir(dir_path: str) -> None:
    """Flushes directory metadata (renames, unlinks) for `dir_path` to storage.

    Windows can't open a directory for flushing, so this is a no-op there.
    """
    if os.name == 'nt':
        return
    flags = os.O_RDONLY
    if hasattr(os, 'O_DIRECTORY'):
        flags |= os.O_DIRECTORY
    fd = os.open(dir_path, flags)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)

def _sync_parent(path: str, durable: bool) -> None:
    if durable:
        _fsync_dir(dirname(abspath(path)))

def _write_flushed(path: str, data: bytes, durable: bool=False) -> None:
    """Writes `data` to `path` (truncating anything already there) and flushes it to disk."""
    logger.debug(f'Writing {len(data)} bytes to {path}')
    with open(path, 'wb') as f:
        f.write(data)
        # make sure all data is on disk before anything else happens
        f.flush()
        os.fsync(f.fileno())
    _sync_parent(path, durable)

def _create_marker(path: str, durable: bool=False) -> None:
    """Creates an empty file at `path` and flushes it to disk."""
    _write_flushed(path, b'', durable=durable)

def _delete(path: str, durable: bool=False) -> None:
    logger.debug(f'Deleting {path}')
    os.remove(path)
    _sync_parent(path, durable)

def _rename(src: str, dst: str, durable: bool=False) -> None:
    logger.debug(f'Renaming {src} -> {dst}')
    os.rename(src, dst)
    _sync_parent(dst, durable)

def _read_file(path: str) -> bytes:
    """Reads the full contents of `path`. Errors (including a missing file) propagate."""
    with open(path, 'rb') as f:
        return f.read()
