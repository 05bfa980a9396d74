"""Classification of the on-disk state of an atomically-written file.

The whole state of a logical file is the triple of existence flags for its target, temp and state
files (see `atomicfile.paths`). There are only 8 such triples, and each one gets a name in
`Configuration`, so that the cleaner and reader can handle every one of them explicitly.
"""

from __future__ import annotations

import logging

from dataclasses import dataclass
from enum import Enum
from os.path import isfile

from atomicfile.paths import PathT, companion_paths

logger = logging.getLogger(__name__)


class Configuration(Enum):
    """Names for every combination of (target, temp, state) existence."""
    ABSENT = (False, False, False)
    VALID = (True, False, False)
    TARGET_AND_TEMP = (True, True, False)
    TEMP_ONLY = (False, True, False)
    STATE_ONLY = (False, False, True)
    TARGET_AND_STATE = (True, False, True)
    TEMP_AND_STATE = (False, True, True)
    ALL = (True, True, True)


# the two configurations that cleaning always ends in
CANONICAL = frozenset([Configuration.ABSENT, Configuration.VALID])


@dataclass(frozen=True)
class FileState:
    """Which of the target, temp and state files exist."""
    target: bool
    temp: bool
    state: bool

    @property
    def configuration(self) -> Configuration:
        return Configuration((self.target, self.temp, self.state))

    @property
    def is_canonical(self) -> bool:
        return self.configuration in CANONICAL

    def __str__(self) -> str:
        flags = ''.join(c if v else '-' for c, v in zip('FTS', (self.target, self.temp, self.state)))
        return f'{self.configuration.name}[{flags}]'


def classify(path: PathT) -> FileState:
    """Checks which of the files for `path` exist right now.

    Each check is a separate call to the filesystem, and nothing is cached. Directories sitting at
    one of these paths don't count as files.
    """
    target, temp, state = companion_paths(path)
    ret = FileState(target=isfile(target), temp=isfile(temp), state=isfile(state))
    logger.debug(f'Classified {target} as {ret}')
    return ret
