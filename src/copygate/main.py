#!/usr/bin/env python3
"""
copygate - Controllable single-file copy engine.

Copies one file in fixed-size chunks while reporting progress, honoring
pause/resume and cancellation, and recovering from an existing destination
through an explicit overwrite/abandon decision.

Architecture:
- Core logic is UI-agnostic (callbacks out, commands in, never touches stdout)
- A single tri-state gate carries both pause and cancellation
- Every termination path ends in exactly one completion callback
- The CLI layer is just one possible control surface
"""

import argparse
import asyncio
import concurrent.futures
import inspect
import logging
import os
import shutil
import signal
import sys
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

# Constants
CHUNK_SIZE = 1024 * 1024  # 1MB


# ============================================================================
# Data Models
# ============================================================================


@dataclass(frozen=True)
class PathSpec:
    """
    Source and destination of a single copy.

    Attributes
    ----------
    path_from : Path
        File to read from
    path_to : Path
        File to create
    """

    path_from: Path
    path_to: Path

    def __post_init__(self):
        for name in ("path_from", "path_to"):
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValueError(f"{name} must not be empty")
            object.__setattr__(self, name, Path(value))


class GateState(Enum):
    """
    State of the pause gate.

    Attributes
    ----------
    RUNNING : str
        The copy loop may proceed
    PAUSED : str
        The copy loop blocks before its next write
    CANCELED : str
        Terminal; the copy loop stops at its next check
    """

    RUNNING = "running"
    PAUSED = "paused"
    CANCELED = "canceled"


class ConflictDecision(Enum):
    """What to do when the destination already exists."""

    OVERWRITE = "overwrite"
    ABANDON = "abandon"


class CopyOutcome(Enum):
    """How a copy invocation ended."""

    COMPLETED = "completed"
    CANCELED = "canceled"
    ABANDONED = "abandoned"
    FAILED = "failed"


class CopyError(Exception):
    """Base class for copy failures reported to the control surface."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DestinationConflictError(CopyError):
    """Raised when the destination file already exists."""


class CopyIOError(CopyError):
    """Raised for open/read/write failures during a copy."""


class CleanupError(CopyError):
    """Raised when a partial destination could not be removed after cancel."""


@dataclass
class CopyResult:
    """
    Result of one copy invocation.

    Attributes
    ----------
    path_spec : PathSpec
        Paths the copy was run with
    outcome : CopyOutcome, default=CopyOutcome.FAILED
        How the invocation ended
    source_size : int, default=0
        Size of the source file in bytes
    bytes_written : int, default=0
        Bytes written to the destination in the last attempt
    error : CopyError | None, default=None
        Terminal failure, set when outcome is FAILED
    cleanup_error : CleanupError | None, default=None
        Failure to delete the partial destination after cancellation
    duration : float, default=0.0
        Wall time of the invocation in seconds
    """

    path_spec: PathSpec
    outcome: CopyOutcome = CopyOutcome.FAILED
    source_size: int = 0
    bytes_written: int = 0
    error: CopyError | None = None
    cleanup_error: CleanupError | None = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """
        Check if the copy completed.

        Returns
        -------
        bool
            True if the destination holds a full copy of the source
        """
        return self.outcome == CopyOutcome.COMPLETED

    @property
    def speed_mb_sec(self) -> float:
        """
        Calculate transfer speed in MB/s.

        Returns
        -------
        float
            Transfer speed in megabytes per second
        """
        if self.duration > 0:
            return (self.bytes_written / (1024 * 1024)) / self.duration
        return 0.0


@dataclass
class CopyConfig:
    """Configuration for copy operations."""

    chunk_size: int = CHUNK_SIZE
    check_disk_space: bool = True
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {self.chunk_size}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CopyConfig":
        """Create config from command-line arguments."""
        return cls(
            chunk_size=args.chunk_size,
            check_disk_space=not args.no_space_check,
            verbose=args.verbose,
        )


# ============================================================================
# Control Primitives
# ============================================================================


class PauseGate:
    """
    Tri-state gate shared between the copy loop and the control surface.

    Waiting blocks until the gate is RUNNING or CANCELED, so cancellation
    always releases a paused loop.
    """

    def __init__(self) -> None:
        self._state = GateState.RUNNING
        self._condition = threading.Condition()

    @property
    def state(self) -> GateState:
        with self._condition:
            return self._state

    @property
    def is_paused(self) -> bool:
        return self.state == GateState.PAUSED

    @property
    def is_canceled(self) -> bool:
        return self.state == GateState.CANCELED

    def pause(self) -> None:
        with self._condition:
            if self._state == GateState.RUNNING:
                self._state = GateState.PAUSED

    def resume(self) -> None:
        with self._condition:
            if self._state == GateState.PAUSED:
                self._state = GateState.RUNNING
                self._condition.notify_all()

    def cancel(self) -> None:
        with self._condition:
            self._state = GateState.CANCELED
            self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> GateState:
        """
        Block until the gate is running or canceled.

        Parameters
        ----------
        timeout : float | None, default=None
            Maximum seconds to wait; None waits indefinitely

        Returns
        -------
        GateState
            State observed when the wait returned (PAUSED only on timeout)
        """
        with self._condition:
            self._condition.wait_for(
                lambda: self._state != GateState.PAUSED, timeout=timeout
            )
            return self._state


class CancellationSignal:
    """
    Cancellation request shared by the caller and one or more engines.

    Callbacks registered with ``register`` run once, on the thread that
    calls ``cancel``, or immediately if the signal is already canceled.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._canceled = False
        self._callbacks: list[Callable[[], Any]] = []

    @property
    def is_canceled(self) -> bool:
        with self._lock:
            return self._canceled

    def cancel(self) -> None:
        with self._lock:
            if self._canceled:
                return
            self._canceled = True
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], Any]) -> None:
        with self._lock:
            if not self._canceled:
                self._callbacks.append(callback)
                return
        callback()

    def unregister(self, callback: Callable[[], Any]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


# ============================================================================
# Core Copy Engine (UI-agnostic)
# ============================================================================


class CopyEngine:
    """
    Copy one file in chunks with progress, pause/resume and cancellation.

    The engine never raises across its boundary: every outcome is reported
    through a ``CopyResult`` and the completion callbacks fire exactly once
    per invocation, after any cleanup.

    Parameters
    ----------
    path_spec : PathSpec
        Source and destination paths
    cancellation_signal : CancellationSignal | None, default=None
        Shared cancellation signal; a private one is created if None
    config : CopyConfig | None, default=None
        Chunk size and pre-flight options
    progress_callback : Callable[[float], Any] | None, default=None
        Registered with ``on_progress``
    complete_callback : Callable[[], Any] | None, default=None
        Registered with ``on_complete``
    error_callback : Callable[[CopyError], Any] | None, default=None
        Registered with ``on_error``
    conflict_resolver : Callable[[Path], Any] | None, default=None
        Asked for a ConflictDecision when the destination exists
    """

    def __init__(
        self,
        path_spec: PathSpec,
        cancellation_signal: CancellationSignal | None = None,
        config: CopyConfig | None = None,
        *,
        progress_callback: Callable[[float], Any] | None = None,
        complete_callback: Callable[[], Any] | None = None,
        error_callback: Callable[[CopyError], Any] | None = None,
        conflict_resolver: Callable[[Path], Any] | None = None,
    ):
        self.path_spec = path_spec
        self.config = config if config else CopyConfig()
        self.conflict_resolver = conflict_resolver
        self.result: CopyResult | None = None

        self._gate = PauseGate()
        self._run_lock = threading.Lock()
        self._created_destination = False
        self._progress_callbacks: list[Callable[[float], Any]] = []
        self._complete_callbacks: list[Callable[[], Any]] = []
        self._error_callbacks: list[Callable[[CopyError], Any]] = []

        if progress_callback:
            self.on_progress(progress_callback)
        if complete_callback:
            self.on_complete(complete_callback)
        if error_callback:
            self.on_error(error_callback)

        self._signal = cancellation_signal if cancellation_signal else CancellationSignal()

    # ------------------------------------------------------------------------
    # Subscriptions and commands
    # ------------------------------------------------------------------------

    def on_progress(self, callback: Callable[[float], Any]) -> None:
        self._progress_callbacks.append(callback)

    def on_complete(self, callback: Callable[[], Any]) -> None:
        self._complete_callbacks.append(callback)

    def on_error(self, callback: Callable[[CopyError], Any]) -> None:
        self._error_callbacks.append(callback)

    def pause(self) -> None:
        self._gate.pause()

    def resume(self) -> None:
        self._gate.resume()

    def toggle_pause(self) -> bool:
        """
        Pause if running, resume if paused.

        Returns
        -------
        bool
            True if the engine is paused after the call
        """
        if self._gate.is_paused:
            self._gate.resume()
        else:
            self._gate.pause()
        return self._gate.is_paused

    def request_cancel(self) -> None:
        """
        Ask the copy loop to stop at its next chunk boundary.

        Notes
        -----
        Only this engine is canceled; the shared cancellation signal is left
        untouched. A paused loop is released immediately.
        """
        self._gate.cancel()

    @property
    def is_paused(self) -> bool:
        return self._gate.is_paused

    @property
    def is_canceled(self) -> bool:
        return self._gate.is_canceled

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    # ------------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------------

    def start(self, daemon: bool = True) -> threading.Thread:
        """
        Run the copy on a new worker thread.

        Parameters
        ----------
        daemon : bool, default=True
            Whether the worker is a daemon thread

        Returns
        -------
        threading.Thread
            The started worker
        """
        thread = threading.Thread(
            target=self.run,
            name=f"copygate-{self.path_spec.path_from.name}",
            daemon=daemon,
        )
        thread.start()
        return thread

    def run(self) -> CopyResult:
        """
        Execute the copy, blocking the calling thread.

        Returns
        -------
        CopyResult
            Outcome of the invocation

        Raises
        ------
        RuntimeError
            If a copy is already running on this engine
        """
        self._acquire()
        try:
            start_time = time.time()
            result = CopyResult(path_spec=self.path_spec)
            try:
                self._copy_with_recovery(result)
            except InterruptedError:
                self._handle_cancel(result)
            except Exception as e:
                self._handle_failure(result, e)
            finally:
                result.duration = time.time() - start_time
            return self._finish(result)
        finally:
            self._run_lock.release()

    async def run_async(self) -> CopyResult:
        """
        Execute the copy on the running event loop using aiofiles.

        Returns
        -------
        CopyResult
            Outcome of the invocation

        Raises
        ------
        RuntimeError
            If a copy is already running on this engine
        """
        self._acquire()
        try:
            start_time = time.time()
            result = CopyResult(path_spec=self.path_spec)
            try:
                await self._copy_with_recovery_async(result)
            except InterruptedError:
                await self._handle_cancel_async(result)
            except asyncio.CancelledError:
                self._gate.cancel()
                await self._handle_cancel_async(result)
                result.duration = time.time() - start_time
                self._finish(result)
                raise
            except Exception as e:
                self._handle_failure(result, e)
            finally:
                result.duration = time.time() - start_time
            return self._finish(result)
        finally:
            self._run_lock.release()

    # ------------------------------------------------------------------------
    # Synchronous copy path
    # ------------------------------------------------------------------------

    def _copy_with_recovery(self, result: CopyResult) -> None:
        """
        Retry the copy for as long as conflicts are resolved by overwriting.

        Parameters
        ----------
        result : CopyResult
            Result to fill in

        Raises
        ------
        InterruptedError
            If cancellation is observed
        """
        while True:
            self._check_cancel()
            try:
                self._copy_once(result)
                return
            except DestinationConflictError as e:
                decision = self._normalize_decision(self._ask_resolver_sync(e.path))
                if decision == ConflictDecision.ABANDON:
                    self._abandon(result)
                    return
                self._check_cancel()
                logging.info(f"Overwriting existing destination: {e.path}")
                os.remove(e.path)

    def _copy_once(self, result: CopyResult) -> None:
        path_from, path_to = self.path_spec.path_from, self.path_spec.path_to
        self._created_destination = False
        result.bytes_written = 0

        with open(path_from, "rb") as source:
            total = os.fstat(source.fileno()).st_size
            result.source_size = total

            try:
                destination = open(path_to, "xb")
            except FileExistsError as e:
                raise DestinationConflictError(str(e), path_to) from e
            self._created_destination = True

            with destination:
                if self.config.check_disk_space:
                    try:
                        self._check_disk_space(total)
                    except OSError:
                        destination.close()
                        os.remove(path_to)
                        self._created_destination = False
                        raise

                logging.info(f"copying {path_from} -> {path_to} ({total:,} bytes)")
                if total == 0:
                    self._report_progress(100.0)
                while chunk := source.read(self.config.chunk_size):
                    self._wait_for_gate()
                    destination.write(chunk)
                    result.bytes_written += len(chunk)
                    self._report_progress(self._percent(result.bytes_written, total))
                self._check_cancel()

        result.outcome = CopyOutcome.COMPLETED
        logging.info(f"Copy completed successfully: {path_to}")

    def _ask_resolver_sync(self, existing_path: Path) -> Any:
        decision = self._ask_resolver(existing_path)
        if isinstance(decision, concurrent.futures.Future):
            return decision.result()
        if inspect.iscoroutine(decision):
            return asyncio.run(decision)
        return decision

    def _wait_for_gate(self) -> None:
        if self._gate.wait() == GateState.CANCELED:
            raise InterruptedError("Copy operation canceled")

    def _handle_cancel(self, result: CopyResult) -> None:
        result.outcome = CopyOutcome.CANCELED
        logging.info(f"Copying was canceled: {self.path_spec.path_from}")
        if not self._created_destination:
            return
        try:
            os.remove(self.path_spec.path_to)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._report_cleanup_failure(result, e)

    # ------------------------------------------------------------------------
    # Asynchronous copy path
    # ------------------------------------------------------------------------

    async def _copy_with_recovery_async(self, result: CopyResult) -> None:
        while True:
            self._check_cancel()
            try:
                await self._copy_once_async(result)
                return
            except DestinationConflictError as e:
                decision = self._ask_resolver(e.path)
                if inspect.isawaitable(decision):
                    decision = await decision
                elif isinstance(decision, concurrent.futures.Future):
                    decision = await asyncio.wrap_future(decision)
                if self._normalize_decision(decision) == ConflictDecision.ABANDON:
                    self._abandon(result)
                    return
                self._check_cancel()
                logging.info(f"Overwriting existing destination: {e.path}")
                await aiofiles.os.remove(e.path)

    async def _copy_once_async(self, result: CopyResult) -> None:
        path_from, path_to = self.path_spec.path_from, self.path_spec.path_to
        self._created_destination = False
        result.bytes_written = 0

        async with aiofiles.open(path_from, "rb") as source:
            total = (await aiofiles.os.stat(path_from)).st_size
            result.source_size = total

            try:
                destination = await aiofiles.open(path_to, "xb")
            except FileExistsError as e:
                raise DestinationConflictError(str(e), path_to) from e
            self._created_destination = True

            if self.config.check_disk_space:
                try:
                    self._check_disk_space(total)
                except OSError:
                    await destination.close()
                    await aiofiles.os.remove(path_to)
                    self._created_destination = False
                    raise

            logging.info(f"copying {path_from} -> {path_to} ({total:,} bytes)")
            try:
                if total == 0:
                    self._report_progress(100.0)
                while chunk := await source.read(self.config.chunk_size):
                    if self._gate.is_paused:
                        await asyncio.to_thread(self._gate.wait)
                    self._check_cancel()
                    await destination.write(chunk)
                    result.bytes_written += len(chunk)
                    self._report_progress(self._percent(result.bytes_written, total))
                self._check_cancel()
            finally:
                await destination.close()

        result.outcome = CopyOutcome.COMPLETED
        logging.info(f"Copy completed successfully: {path_to}")

    async def _handle_cancel_async(self, result: CopyResult) -> None:
        result.outcome = CopyOutcome.CANCELED
        logging.info(f"Copying was canceled: {self.path_spec.path_from}")
        if not self._created_destination:
            return
        try:
            await aiofiles.os.remove(self.path_spec.path_to)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._report_cleanup_failure(result, e)

    # ------------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------------

    def _acquire(self) -> None:
        if not self._run_lock.acquire(blocking=False):
            raise RuntimeError(
                f"A copy is already running for {self.path_spec.path_from}"
            )
        self._signal.register(self._gate.cancel)

    def _check_cancel(self) -> None:
        if self._gate.is_canceled:
            raise InterruptedError("Copy operation canceled")

    def _check_disk_space(self, required_bytes: int) -> None:
        """
        Verify sufficient disk space in the destination directory.

        Parameters
        ----------
        required_bytes : int
            Number of bytes required for the copy operation

        Raises
        ------
        OSError
            If the directory has insufficient free space or cannot be queried
        """
        parent = self.path_spec.path_to.parent
        usage = shutil.disk_usage(parent)
        if usage.free < required_bytes:
            raise OSError(
                f"Insufficient space on {parent}: "
                f"need {required_bytes / 1e9:.2f} GB, "
                f"have {usage.free / 1e9:.2f} GB"
            )

    @staticmethod
    def _percent(bytes_written: int, total: int) -> float:
        if total <= 0:
            return 100.0
        return min(bytes_written * 100.0 / total, 100.0)

    def _report_progress(self, percent: float) -> None:
        logging.debug(f"progress {percent:.1f}% for {self.path_spec.path_to}")
        for callback in self._progress_callbacks:
            callback(percent)

    def _ask_resolver(self, existing_path: Path) -> Any:
        logging.info(f"Destination already exists: {existing_path}")
        if self.conflict_resolver is None:
            return ConflictDecision.ABANDON
        return self.conflict_resolver(existing_path)

    @staticmethod
    def _normalize_decision(decision: Any) -> ConflictDecision:
        return ConflictDecision(decision)

    def _abandon(self, result: CopyResult) -> None:
        result.outcome = CopyOutcome.ABANDONED
        logging.info(f"Leaving existing destination unchanged: {self.path_spec.path_to}")

    def _handle_failure(self, result: CopyResult, exc: Exception) -> None:
        result.outcome = CopyOutcome.FAILED
        if isinstance(exc, CopyError):
            error = exc
        elif isinstance(exc, OSError):
            error = CopyIOError(str(exc), Path(exc.filename) if exc.filename else None)
        else:
            error = CopyError(f"Unexpected error: {exc}")
        if error is not exc:
            error.__cause__ = exc
        result.error = error
        logging.error(f"Copy failed: {self.path_spec.path_from} -> {self.path_spec.path_to}: {error}")
        self._emit_error(error)

    def _report_cleanup_failure(self, result: CopyResult, exc: OSError) -> None:
        error = CleanupError(f"Could not delete file: {exc}", self.path_spec.path_to)
        error.__cause__ = exc
        result.cleanup_error = error
        logging.warning(str(error))
        self._emit_error(error)

    def _emit_error(self, error: CopyError) -> None:
        for callback in self._error_callbacks:
            try:
                callback(error)
            except Exception:
                logging.exception("Error callback raised")

    def _finish(self, result: CopyResult) -> CopyResult:
        self.result = result
        self._signal.unregister(self._gate.cancel)
        for callback in self._complete_callbacks:
            try:
                callback()
            except Exception:
                logging.exception("Completion callback raised")
        return result


# ============================================================================
# CLI Layer (Presentation)
# ============================================================================


class CLIProcessor:
    """
    Terminal control surface for a single copy.

    Runs the engine on a worker thread, renders progress on stdout and maps
    signals to engine commands: SIGINT cancels, SIGUSR1 pauses and SIGUSR2
    resumes (POSIX only).

    Parameters
    ----------
    source : Path
        Source file path
    destination : Path
        Destination file path, or an existing directory to copy into
    config : CopyConfig
        Copy configuration
    conflict_policy : ConflictDecision | None, default=None
        Fixed answer for an existing destination; None prompts on a TTY
    """

    def __init__(
        self,
        source: Path,
        destination: Path,
        config: CopyConfig,
        conflict_policy: ConflictDecision | None = None,
    ):
        self.source = source
        self.destination = destination
        self.config = config
        self.conflict_policy = conflict_policy
        self._source_size = 0

    def run(self) -> int:
        """
        Execute the copy and print a summary.

        Returns
        -------
        int
            Exit code: 0 for completed or abandoned, 1 for failure, 130 for cancel
        """
        path_spec = PathSpec(self.source, self._resolve_destination())
        engine = CopyEngine(
            path_spec,
            CancellationSignal(),
            self.config,
            progress_callback=self._show_progress,
            conflict_resolver=self._resolve_conflict,
        )

        if path_spec.path_from.is_file():
            self._source_size = path_spec.path_from.stat().st_size

        print(f"File: {path_spec.path_from.name}")
        previous_handlers = self._install_signal_handlers(engine)
        try:
            thread = engine.start()
            while thread.is_alive():
                thread.join(0.2)
        finally:
            self._restore_signal_handlers(previous_handlers)

        sys.stdout.write("\n")
        sys.stdout.flush()
        return self._show_result_summary(engine.result)

    def _resolve_destination(self) -> Path:
        if self.destination.is_dir():
            return self.destination / self.source.name
        return self.destination

    def _show_progress(self, percent: float) -> None:
        total = self._source_size
        mb_done = total * percent / 100 / (1024 * 1024)
        mb_total = total / (1024 * 1024)
        sys.stdout.write(
            f"\rCopying: {percent:.1f}% ({mb_done:.1f}/{mb_total:.1f} MB)".ljust(80)
        )
        sys.stdout.flush()

    def _resolve_conflict(self, existing_path: Path) -> ConflictDecision:
        if self.conflict_policy is not None:
            return self.conflict_policy
        if not sys.stdin.isatty():
            return ConflictDecision.ABANDON
        answer = input(f"\n{existing_path} already exists. Replace it? [y/N] ")
        if answer.strip().lower() in ("y", "yes"):
            return ConflictDecision.OVERWRITE
        return ConflictDecision.ABANDON

    @staticmethod
    def _install_signal_handlers(engine: CopyEngine) -> dict[int, Any]:
        if threading.current_thread() is not threading.main_thread():
            return {}

        handlers = {signal.SIGINT: lambda signum, frame: engine.request_cancel()}
        if hasattr(signal, "SIGUSR1"):
            handlers[signal.SIGUSR1] = lambda signum, frame: engine.pause()
            handlers[signal.SIGUSR2] = lambda signum, frame: engine.resume()

        return {signum: signal.signal(signum, handler) for signum, handler in handlers.items()}

    @staticmethod
    def _restore_signal_handlers(previous: dict[int, Any]) -> None:
        for signum, handler in previous.items():
            # None means the handler was not installed from Python
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)

    def _show_result_summary(self, result: CopyResult) -> int:
        """
        Display a summary of the copy and map it to an exit code.

        Parameters
        ----------
        result : CopyResult
            Result of the copy operation to summarize

        Returns
        -------
        int
            Process exit code
        """
        if result.outcome == CopyOutcome.COMPLETED:
            print(
                f"✓ Success "
                f"({result.speed_mb_sec:.2f} MB/s, "
                f"{result.source_size / (1024 * 1024):.2f} MB)"
            )
            return 0

        if result.outcome == CopyOutcome.ABANDONED:
            print(f"- Skipped: {result.path_spec.path_to} already exists")
            return 0

        if result.outcome == CopyOutcome.CANCELED:
            print("Copying was canceled")
            if result.cleanup_error:
                print(f"  ! {result.cleanup_error}")
            return 130

        print(f"✗ Failed: {result.error}")
        return 1


# ============================================================================
# Main Entry Point
# ============================================================================


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Parameters
    ----------
    verbose : bool
        Enable verbose logging
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Parameters
    ----------
    argv : list[str] | None, default=None
        Arguments to parse; sys.argv[1:] when None

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Copy a file with progress, pause/resume and cancellation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  copygate movie.mov /backup/                   # Copy into a directory
  copygate --overwrite a.bin b.bin              # Replace b.bin if it exists
  kill -USR1 <pid> / kill -USR2 <pid>           # Pause / resume a running copy
        """,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "-b",
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE,
        help="Chunk size in bytes (default: 1MB)",
    )

    conflict = parser.add_mutually_exclusive_group()
    conflict.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the destination if it already exists",
    )
    conflict.add_argument(
        "--no-clobber",
        action="store_true",
        help="Leave an existing destination untouched without asking",
    )

    parser.add_argument(
        "--no-space-check",
        action="store_true",
        help="Skip the free disk space check before copying",
    )

    parser.add_argument("source", type=Path, help="Source file path")
    parser.add_argument(
        "destination", type=Path, help="Destination file or directory path"
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Returns
    -------
    int
        Exit code: 0 for success, 1 for failure, 130 for cancellation
    """
    try:
        args = parse_arguments(argv)
        config = CopyConfig.from_args(args)
        setup_logging(config.verbose)

        conflict_policy = None
        if args.overwrite:
            conflict_policy = ConflictDecision.OVERWRITE
        elif args.no_clobber:
            conflict_policy = ConflictDecision.ABANDON

        processor = CLIProcessor(
            source=args.source,
            destination=args.destination,
            config=config,
            conflict_policy=conflict_policy,
        )
        return processor.run()

    except ValueError as e:
        logging.error(f"Invalid parameter: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
