"""
==============================================
Data Transform Pipeline (one operator session)
==============================================

This module ties one IngestionRegistry, one FileIngestor and one
BatchTransformOrchestrator together for a single session.

USAGE EXAMPLES:

1. Ingest a crawler export directory and download everything as CSV:
    from datatransform.pipeline import DataTransformPipeline

    pipeline = DataTransformPipeline()
    pipeline.ingest_directory("exports/")
    archive = pipeline.transform(fmt="csv", output_dir="output/")

2. Transform only some files, watching progress:
    pipeline.ingest_files(["exports/bili/p1.json", "exports/xhs/notes.csv"])
    archive = pipeline.transform(
        names=["p1.json"],
        on_progress=lambda p: print(f"{p.percent:.0f}%"),
    )

3. Context manager (registry cleared on exit):
    with DataTransformPipeline() as pipeline:
        pipeline.ingest_directory("exports/")
        pipeline.transform()

4. Command line:
    python -m datatransform.pipeline exports/ csv
"""

import asyncio
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from datatransform.config import AppConfig, get_config
from datatransform.exceptions import DataTransformError
from datatransform.ingestion import FileIngestor, IngestionRegistry, IngestOutcome, IngestSource
from datatransform.ingestion.file_ingestor import SUPPORTED_EXTENSIONS
from datatransform.models import TransformArchive
from datatransform.transform_orchestrator import BatchTransformOrchestrator, ProgressObserver


class DataTransformPipeline:
    """
    High-level wrapper for one operator session: ingest files, inspect
    them, transform a selection into a downloadable archive.
    """

    def __init__(self, config: Optional[AppConfig] = None, registry: Optional[IngestionRegistry] = None):
        """
        Initialize the session.

        Args:
            config: Optional configuration. If None, loads from environment.
            registry: Optional registry to share; a fresh one if None.
        """
        self._config = config or get_config()
        self.registry = registry if registry is not None else IngestionRegistry()
        self._ingestor = FileIngestor(self.registry, self._config.ingest)
        self._orchestrator = BatchTransformOrchestrator(self._config.export)

    def ingest_files(
        self,
        paths: Sequence[Union[str, Path]],
        root: Union[str, Path, None] = None
    ) -> List[IngestOutcome]:
        """
        Ingest files from disk concurrently.

        Args:
            paths: Files to read; their paths double as platform hints
            root: If given, hints are taken relative to this directory

        Returns:
            One outcome per path. Failures are reported, not raised.
        """
        outcomes = asyncio.run(self._ingestor.ingest_many(list(paths), root))
        self._report(outcomes)
        return outcomes

    def ingest_uploads(self, sources: Sequence[IngestSource]) -> List[IngestOutcome]:
        """Ingest in-memory uploads (bytes + optional relative path)."""
        outcomes = asyncio.run(self._ingestor.ingest_many(list(sources)))
        self._report(outcomes)
        return outcomes

    def ingest_directory(self, directory: Union[str, Path]) -> List[IngestOutcome]:
        """
        Recursively ingest every .json / .csv file under a directory,
        in sorted path order.
        """
        root = Path(directory)
        paths = sorted(
            p for p in root.rglob("*")
            if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
        )
        if not paths:
            print(f"⚠ No .json or .csv files found under {root}")
            return []
        return self.ingest_files(paths, root)

    def remove(self, name: str) -> bool:
        return self.registry.remove(name)

    def clear(self) -> None:
        self.registry.clear()

    def get_files(self) -> List[dict]:
        """Display rows for every ingested file, in ingestion order."""
        return self.registry.summaries()

    def transform(
        self,
        names: Optional[Iterable[str]] = None,
        fmt: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None,
        on_progress: Optional[ProgressObserver] = None
    ) -> TransformArchive:
        """
        Transform a selection (all files if names is None) into one zip.

        Args:
            names: File names to transform, in processing order
            fmt: "json" or "csv"; the configured default if None
            output_dir: If given, the archive is also written there
            on_progress: Progress observer

        Returns:
            The finished archive

        Raises:
            NoInputSelected, UnsupportedOutputFormat, TransformFailed
        """
        selected = self.registry.list() if names is None else self.registry.select(names)
        archive = self._orchestrator.transform(selected, fmt, on_progress=on_progress)
        print(f"✓ Transformed {len(selected)} files into {archive.file_name} ({len(archive.entries)} entries)")

        if output_dir is not None:
            target = self.save_archive(archive, output_dir)
            print(f"✓ Archive written to {target}")

        if self._config.clear_after_transform:
            for descriptor in selected:
                self.registry.remove(descriptor.name)

        return archive

    @staticmethod
    def save_archive(archive: TransformArchive, output_dir: Union[str, Path]) -> Path:
        target_dir = Path(output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / archive.file_name
        target.write_bytes(archive.content)
        return target

    def _report(self, outcomes: List[IngestOutcome]) -> None:
        for outcome in outcomes:
            if outcome.ok:
                d = outcome.descriptor
                print(f"✓ {d.name}: {d.platform.display_name} / {d.kind.value} / {d.record_count} records")
            else:
                print(f"✗ {outcome.name}: {outcome.error}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.clear()
        return False


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import sys

    from datatransform.log_config import setup_logging

    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Crawl Data Transform Pipeline")
        print("=" * 60)
        print("\nUsage:")
        print("  python -m datatransform.pipeline <dir>          # Transform to the default format")
        print("  python -m datatransform.pipeline <dir> csv      # Transform to CSV")
        return 1

    config = get_config()
    setup_logging(config.log_level, config.log_dir or None)

    directory = args[0]
    fmt = args[1] if len(args) > 1 else None

    pipeline = DataTransformPipeline(config)
    pipeline.ingest_directory(directory)
    if len(pipeline.registry) == 0:
        return 1

    try:
        pipeline.transform(
            fmt=fmt,
            output_dir=config.export.output_dir,
            on_progress=lambda p: print(f"   → {p.completed}/{p.total} ({p.percent:.0f}%)", end="\r"),
        )
    except DataTransformError as e:
        print(f"\n✗ {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
