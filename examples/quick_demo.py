#!/usr/bin/env python3
"""
Quick demonstration of copygate functionality.

This script creates a sample file and drives the copy engine the way a
desktop control surface would: the copy runs on a worker thread while the
main thread pauses, resumes and finally cancels a second copy.
"""

import sys
import tempfile
import time
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from copygate import (
    CancellationSignal,
    ConflictDecision,
    CopyConfig,
    CopyEngine,
    PathSpec,
    setup_logging,
)


def create_demo_file(file_path: Path, size_mb: int = 8) -> None:
    """
    Create a demo file of the given size.

    Parameters
    ----------
    file_path : Path
        Where to create the file
    size_mb : int
        Size in MB
    """
    chunk = b"DEMODATA" * (1024 * 1024 // 8)
    with open(file_path, "wb") as f:
        for _ in range(size_mb):
            f.write(chunk)


def show_progress(percent: float) -> None:
    sys.stdout.write(f"\r  progress: {percent:5.1f}%")
    sys.stdout.flush()


def demo_pause_resume(source: Path, work_dir: Path) -> None:
    """Copy with a pause in the middle."""
    print("\n=== Pause / resume ===")
    engine = CopyEngine(
        PathSpec(source, work_dir / "paused_copy.bin"),
        config=CopyConfig(chunk_size=256 * 1024),
        progress_callback=show_progress,
        complete_callback=lambda: print("\n  completion callback fired"),
    )

    thread = engine.start()
    engine.pause()
    print("  paused for one second...")
    time.sleep(1)
    engine.resume()
    thread.join()

    print(f"  outcome: {engine.result.outcome.value}")


def demo_overwrite(source: Path, work_dir: Path) -> None:
    """Copy onto an existing file and choose to overwrite it."""
    print("\n=== Destination conflict ===")
    dest = work_dir / "existing.bin"
    dest.write_bytes(b"X")

    def ask(existing_path: Path) -> ConflictDecision:
        print(f"  {existing_path.name} exists, overwriting")
        return ConflictDecision.OVERWRITE

    engine = CopyEngine(PathSpec(source, dest), conflict_resolver=ask)
    result = engine.run()
    print(f"  outcome: {result.outcome.value}, size: {dest.stat().st_size:,} bytes")


def demo_cancel(source: Path, work_dir: Path) -> None:
    """Cancel a paused copy through the shared cancellation signal."""
    print("\n=== Cancel while paused ===")
    dest = work_dir / "canceled_copy.bin"
    cancellation = CancellationSignal()
    engine = CopyEngine(PathSpec(source, dest), cancellation)

    engine.pause()
    thread = engine.start()
    time.sleep(0.2)
    cancellation.cancel()
    thread.join()

    print(f"  outcome: {engine.result.outcome.value}, partial file left: {dest.exists()}")


def main() -> int:
    setup_logging(verbose=False)

    with tempfile.TemporaryDirectory() as temp_dir:
        work_dir = Path(temp_dir)
        source = work_dir / "source.bin"
        create_demo_file(source)

        demo_pause_resume(source, work_dir)
        demo_overwrite(source, work_dir)
        demo_cancel(source, work_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
