"""Tests out atomicfile.clean"""

from __future__ import annotations

import sys

import pytest

from atomicfile.clean import clean, is_canonical
from atomicfile.constants import CleanError
from atomicfile.state import Configuration, FileState

from .helpers import contents, existing, make_files

OLD = b'old contents'
NEW = b'new contents, a bit longer'

@pytest.fixture
def path(tmp_path):
    """Fixture for a target path in an empty directory."""
    return str(tmp_path / 'data.bin')

# (target, temp, state) -> expected final target contents (None for absent)
CLEAN_CASES = [
    (None, None, False, None),
    (OLD, None, False, OLD),
    (OLD, NEW, False, OLD),
    (None, NEW, False, NEW),
    (None, None, True, None),
    (OLD, None, True, OLD),
    (None, NEW, True, None),
    (OLD, NEW, True, OLD),
]

@pytest.mark.parametrize('target,temp,state,expected', CLEAN_CASES)
def test_clean_table(path, target, temp, state, expected):
    """Every configuration ends up canonical with the right contents."""
    make_files(path, target=target, temp=temp, state=state)
    final = clean(path)
    assert final.is_canonical
    if expected is None:
        assert existing(path) == (False, False, False)
        assert final.configuration == Configuration.ABSENT
    else:
        assert existing(path) == (True, False, False)
        assert final.configuration == Configuration.VALID
        assert contents(path) == expected

@pytest.mark.parametrize('target,temp,state,expected', CLEAN_CASES)
def test_clean_idempotent(path, target, temp, state, expected):
    """A second clean changes nothing."""
    make_files(path, target=target, temp=temp, state=state)
    first = clean(path)
    before = existing(path)
    data = contents(path) if first.target else None
    assert is_canonical(path)
    assert clean(path) == first
    assert existing(path) == before
    if first.target:
        assert contents(path) == data

def test_crash_after_temp_flush_target_exists(path):
    """F=old, T=new: the write never deleted F, so roll back to old."""
    make_files(path, target=OLD, temp=NEW)
    clean(path)
    assert contents(path) == OLD

def test_crash_after_target_delete(path):
    """T=new alone: T holds the full write, so promote it."""
    make_files(path, temp=NEW)
    clean(path)
    assert contents(path) == NEW
    assert existing(path) == (True, False, False)

def test_crash_after_state_created(path):
    """S alone: a write from nothing never got going."""
    make_files(path, state=True)
    clean(path)
    assert existing(path) == (False, False, False)

def test_crash_before_state_delete(path):
    """S and T=new: not committed yet, so even a complete T is thrown away."""
    make_files(path, temp=NEW, state=True)
    clean(path)
    assert existing(path) == (False, False, False)

def test_clean_logs_steps(path, caplog):
    """Each recovery step is logged at info, and a clean path logs nothing."""
    make_files(path, target=OLD, temp=NEW, state=True)
    with caplog.at_level('INFO', logger='atomicfile.clean'):
        clean(path)
    assert len(caplog.records) == 2
    caplog.clear()
    with caplog.at_level('INFO', logger='atomicfile.clean'):
        clean(path)
    assert not caplog.records

def test_clean_durable(path):
    """Flushing the directory too doesn't change the outcome."""
    make_files(path, temp=NEW)
    clean(path, durable=True)
    assert contents(path) == NEW

def test_clean_not_converging(path, monkeypatch):
    """If something keeps undoing our steps, we raise instead of looping forever."""
    make_files(path, temp=NEW)
    monkeypatch.setattr(sys.modules['atomicfile.clean'], '_rename', lambda src, dst, durable=False: None)
    with pytest.raises(CleanError) as excinfo:
        clean(path)
    assert excinfo.value.state == FileState(False, True, False)
