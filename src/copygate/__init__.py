"""
copygate: Controllable single-file copying.

This package copies one file in chunks with live progress reporting,
cooperative pause/resume, cancellation with cleanup of partial output, and
an explicit overwrite/abandon decision when the destination already exists.
"""

from .main import (
    CHUNK_SIZE,
    CancellationSignal,
    CleanupError,
    CLIProcessor,
    ConflictDecision,
    CopyConfig,
    CopyEngine,
    CopyError,
    CopyIOError,
    CopyOutcome,
    CopyResult,
    DestinationConflictError,
    GateState,
    PathSpec,
    PauseGate,
    main,
    parse_arguments,
    setup_logging,
)

__version__ = "1.0.0"
__author__ = "copygate project"
__description__ = "Controllable file copying with pause, resume and cancel"

__all__ = [
    "CHUNK_SIZE",
    "CancellationSignal",
    "CleanupError",
    "CLIProcessor",
    "ConflictDecision",
    "CopyConfig",
    "CopyEngine",
    "CopyError",
    "CopyIOError",
    "CopyOutcome",
    "CopyResult",
    "DestinationConflictError",
    "GateState",
    "PathSpec",
    "PauseGate",
    "main",
    "parse_arguments",
    "setup_logging",
]
