"""Recovery of leftover files from interrupted writes.

`clean()` brings the files for a path back to one of the two canonical configurations: only the
target exists (`VALID`), or nothing exists (`ABSENT`). It does this by repeatedly classifying the
files and applying exactly one corrective step for the current configuration:

    configuration      files    step
    ABSENT             - - -    done
    VALID              F - -    done
    TARGET_AND_TEMP    F T -    delete T (old target is still intact)
    TEMP_ONLY          - T -    rename T -> F (T holds the complete new contents)
    STATE_ONLY         - - S    delete S
    TARGET_AND_STATE   F - S    delete S (the state file is stale once F exists)
    TEMP_AND_STATE     - T S    delete T (the write was never committed)
    ALL                F T S    delete T

Every step removes one auxiliary file or renames one, so this always converges within a few steps
unless something else is modifying the files at the same time.
"""

from __future__ import annotations

import logging

from typing import Callable

from atomicfile.constants import DURABLE_DIRS, MAX_CLEAN_STEPS, CleanError
from atomicfile.file_utils import _delete, _rename
from atomicfile.paths import PathT, companion_paths
from atomicfile.state import Configuration, FileState, classify

logger = logging.getLogger(__name__)

# a step takes (target, temp, state, durable) paths
StepT = Callable[[str, str, str, bool], None]

def _delete_temp(target: str, temp: str, state: str, durable: bool) -> None:
    _delete(temp, durable=durable)

def _delete_state(target: str, temp: str, state: str, durable: bool) -> None:
    _delete(state, durable=durable)

def _promote_temp(target: str, temp: str, state: str, durable: bool) -> None:
    _rename(temp, target, durable=durable)

# the single corrective step for each non-canonical configuration
STEPS: dict[Configuration, tuple[str, StepT]] = {
    Configuration.TARGET_AND_TEMP: ('rolling back: deleting temp file', _delete_temp),
    Configuration.TEMP_ONLY: ('committing: promoting temp file to target', _promote_temp),
    Configuration.STATE_ONLY: ('rolling back: deleting state file', _delete_state),
    Configuration.TARGET_AND_STATE: ('deleting stale state file', _delete_state),
    Configuration.TEMP_AND_STATE: ('rolling back: deleting uncommitted temp file', _delete_temp),
    Configuration.ALL: ('deleting temp file', _delete_temp),
}


def clean(path: PathT, durable: bool|None=None) -> FileState:
    """Cleans up leftover files for `path`, returning the final (canonical) state.

    At the end, either no files exist or only the target does. Calling this on an already-clean
    path does nothing. If `durable` is True (default from `DURABLE_DIRS`), the parent directory is
    flushed after each step.

    Raises `CleanError` if we don't converge within `MAX_CLEAN_STEPS` steps.
    """
    if durable is None:
        durable = DURABLE_DIRS
    target, temp, state = companion_paths(path)
    for _ in range(MAX_CLEAN_STEPS):
        cur = classify(target)
        if cur.is_canonical:
            return cur
        desc, step = STEPS[cur.configuration]
        logger.info(f'Cleaning {target} from {cur}: {desc}')
        step(target, temp, state, durable)
    cur = classify(target)
    if cur.is_canonical:
        return cur
    raise CleanError(target, cur, MAX_CLEAN_STEPS)

def is_canonical(path: PathT) -> bool:
    """Returns whether `path` is already clean, without changing anything on disk."""
    return classify(path).is_canonical
