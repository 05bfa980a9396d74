from __future__ import annotations

import os

from typing import Any

# suffixes appended to the target path to get its companion files
TEMP_SUFFIX = '.tmp'
STATE_SUFFIX = '.stt'

DEFAULT_ENCODING = 'utf-8'
# strips a leading byte order mark if there is one
DEFAULT_READ_ENCODING = 'utf-8-sig'

# the longest chain of corrective actions is 3, so this only trips on a concurrent writer
MAX_CLEAN_STEPS = 8

def _env_flag(name: str, default: bool=False) -> bool:
    """Parses a boolean flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

# whether to also flush the parent directory after deletes and renames
DURABLE_DIRS = _env_flag('ATOMICFILE_DURABLE_DIRS')


class AtomicFileError(Exception):
    """Base class for all errors raised by atomicfile."""


class InvalidTarget(AtomicFileError):
    """Exception raised when the target path can't hold a file (e.g. it's a directory)."""
    def __init__(self, path: str):
        super().__init__(f"The path '{path}' is a directory, not a file. Can not write contents.")
        self.path = path


class NoValidFile(AtomicFileError):
    """Exception raised when none of the files for a path holds valid data."""
    def __init__(self, path: str, state: Any=None):
        msg = f"No valid file found for '{path}'"
        if state is not None:
            msg += f" ({state})"
        super().__init__(msg)
        self.path = path
        self.state = state


class CleanError(AtomicFileError):
    """Exception raised when cleaning doesn't converge, usually due to a concurrent writer."""
    def __init__(self, path: str, state: Any, steps: int):
        super().__init__(f"Cleaning '{path}' did not converge after {steps} steps, last state {state}")
        self.path = path
        self.state = state
        self.steps = steps
