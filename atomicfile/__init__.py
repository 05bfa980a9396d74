from .constants import AtomicFileError, InvalidTarget, NoValidFile, CleanError
from .paths import temp_path, state_path, companion_paths, verify_writable
from .state import Configuration, FileState, classify
from .clean import clean, is_canonical
from .read import resolve_readable, read_all_bytes, read_all_text, read_all_lines, exists
from .write import write_all_bytes, write_all_text, write_all_lines, delete

__all__ = [
    'AtomicFileError',
    'InvalidTarget',
    'NoValidFile',
    'CleanError',
    'temp_path',
    'state_path',
    'companion_paths',
    'verify_writable',
    'Configuration',
    'FileState',
    'classify',
    'clean',
    'is_canonical',
    'resolve_readable',
    'read_all_bytes',
    'read_all_text',
    'read_all_lines',
    'exists',
    'write_all_bytes',
    'write_all_text',
    'write_all_lines',
    'delete',
]
