"""
Execution engine for operation calls.

Validates a call against its definition, resolves linked parameters and
invokes the operation implementation.
"""

from .executor import run_operation
from .resolver import decode_params, resolve_params
from .results import CallResultCache
from .program_runner import (
    CallOutcome,
    DuplicateCallError,
    ProgramError,
    ProgramRunner,
    ProgramRunReport,
    UnknownCallError,
)

__all__ = [
    'run_operation',
    'resolve_params',
    'decode_params',
    'CallResultCache',
    'CallOutcome',
    'ProgramRunner',
    'ProgramRunReport',
    # Exceptions
    'ProgramError',
    'DuplicateCallError',
    'UnknownCallError',
]
