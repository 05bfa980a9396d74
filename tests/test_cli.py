"""Tests out the atomicfile command line interface"""

from __future__ import annotations

import io
import sys

import pytest

from atomicfile.cli import main

from .helpers import contents, existing, make_files

@pytest.fixture
def path(tmp_path):
    """Fixture for a target path in an empty directory."""
    return str(tmp_path / 'data.txt')

def test_status_does_not_modify(path, capsys):
    """status only reports."""
    make_files(path, target=b'old', temp=b'new')
    assert main(['status', path]) == 0
    assert 'TARGET_AND_TEMP[FT-]' in capsys.readouterr().out
    assert existing(path) == (True, True, False)

def test_clean(path, capsys):
    """clean recovers and reports the final state."""
    make_files(path, temp=b'new')
    assert main(['clean', path]) == 0
    assert 'VALID[F--]' in capsys.readouterr().out
    assert contents(path) == b'new'

def test_write_text_and_read(path, capsysbinary):
    """write --text then read round-trips through stdout."""
    assert main(['write', path, '--text', 'hello']) == 0
    assert main(['read', path]) == 0
    assert capsysbinary.readouterr().out == b'hello'

def test_write_stdin(path, monkeypatch):
    """write with no --text reads stdin."""
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'from\nstdin')))
    assert main(['write', path]) == 0
    assert contents(path) == b'from\nstdin'

def test_errors(tmp_path, path, capsys):
    """Library errors are reported with a nonzero exit status."""
    assert main(['read', path]) == 1
    assert 'No valid file' in capsys.readouterr().err
    assert main(['write', str(tmp_path), '--text', 'x']) == 1
    assert 'is a directory' in capsys.readouterr().err
