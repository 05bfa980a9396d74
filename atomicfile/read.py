"""Reading atomically-written files.

All the public read functions clean the path first (finishing or rolling back any interrupted
write), then figure out which single file holds valid data, and read it once. If that file
disappears in between, the resulting `OSError` propagates; we don't re-resolve.
"""

from __future__ import annotations

import logging
import re

from atomicfile.clean import clean
from atomicfile.constants import DEFAULT_READ_ENCODING, NoValidFile
from atomicfile.file_utils import _read_file
from atomicfile.paths import PathT, companion_paths
from atomicfile.state import Configuration, classify

logger = logging.getLogger(__name__)

# line terminators recognized by `read_all_lines()`
LINE_SPLIT_REGEXP = re.compile(r'\r\n|\r|\n')


def resolve_readable(path: PathT) -> str:
    """Returns the path of the file that currently holds valid data for `path`.

    This does not clean first, so it also handles the configurations that only show up mid-crash:
    - target exists (with or without a temp file, but no state file): the target
    - only the temp file exists: the temp file, which holds a complete, uncommitted write
    - anything else: raises `NoValidFile`
    """
    target, temp, _ = companion_paths(path)
    cur = classify(target)
    config = cur.configuration
    if config in (Configuration.VALID, Configuration.TARGET_AND_TEMP):
        return target
    if config == Configuration.TEMP_ONLY:
        return temp
    raise NoValidFile(target, cur)

def _resolve_clean(path: PathT) -> str:
    clean(path)
    ret = resolve_readable(path)
    logger.debug(f'Reading {path} from {ret}')
    return ret

def read_all_bytes(path: PathT) -> bytes:
    """Returns the contents of `path` as bytes."""
    return _read_file(_resolve_clean(path))

def read_all_text(path: PathT, encoding: str=DEFAULT_READ_ENCODING) -> str:
    """Returns the contents of `path` decoded as text.

    The default encoding is utf-8, skipping a byte order mark if present.
    """
    return read_all_bytes(path).decode(encoding)

def split_lines(text: str) -> list[str]:
    """Splits text on \\r\\n, \\n or \\r, without a trailing empty line for a final terminator."""
    if not text:
        return []
    lines = LINE_SPLIT_REGEXP.split(text)
    if lines[-1] == '':
        lines.pop()
    return lines

def read_all_lines(path: PathT, encoding: str=DEFAULT_READ_ENCODING) -> list[str]:
    """Returns the contents of `path` as a list of lines (without terminators)."""
    return split_lines(read_all_text(path, encoding=encoding))

def exists(path: PathT) -> bool:
    """Returns whether `path` has valid contents to read (after cleaning it)."""
    return clean(path).target
