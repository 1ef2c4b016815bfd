"""File ingestion: parse uploaded .json / .csv files into record batches.

Each file is parsed, its platform and kind are detected, and the result
is bound into a FileDescriptor. Batches of files are parsed concurrently
in worker threads; each success is appended to the registry as soon as
it finishes. Failures are per file and never abort the batch.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from datatransform.analysis import PlatformDetector, RecordTypeClassifier
from datatransform.config import IngestConfig
from datatransform.exceptions import (
    IngestionError,
    MalformedInput,
    ReadFailure,
    UnsupportedFormat,
)
from datatransform.models import FileDescriptor, RawRecord
from .registry import IngestionRegistry

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".json", ".csv")

# Cells beyond the header width land under this key
CSV_EXTRA_KEY = "__parsed_extra"

# Long note bodies overflow the csv module's 128 KiB default
CSV_FIELD_SIZE_LIMIT = 64 * 1024 * 1024


@dataclass
class IngestSource:
    """Raw bytes of one upload plus whatever path context came with it."""
    name: str
    data: bytes
    path: Optional[str] = None


@dataclass
class IngestOutcome:
    """Per-file result of a batch ingestion: a descriptor or an error."""
    name: str
    descriptor: Optional[FileDescriptor] = None
    error: Optional[IngestionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FileIngestor:
    def __init__(
        self,
        registry: Optional[IngestionRegistry] = None,
        config: Optional[IngestConfig] = None,
    ):
        self.registry = registry if registry is not None else IngestionRegistry()
        self._config = config or IngestConfig()

    def ingest(self, data: bytes, name: str, declared_path: Optional[str] = None) -> FileDescriptor:
        """Parse one file and detect its platform and kind.

        Does not touch the registry; see ingest_and_register().

        Raises:
            UnsupportedFormat: extension is not .json or .csv
            MalformedInput: content cannot be decoded into a record array
        """
        extension = _extension(name)
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormat(name)

        text = self._decode(data, name)
        if extension == ".json":
            records = self._parse_json(text, name)
        else:
            records = self._parse_csv(text, name)

        path = declared_path or name
        platform = PlatformDetector.detect(records, path)
        kind = RecordTypeClassifier.classify(records)

        logger.info(
            "Parsed %s: %d records, platform=%s, kind=%s",
            name, len(records), platform.value, kind.value,
        )
        return FileDescriptor(
            name=name,
            path=path,
            size=len(data),
            kind=kind,
            platform=platform,
            record_count=len(records),
            records=records,
        )

    def ingest_path(self, path: Union[str, Path], root: Union[str, Path, None] = None) -> FileDescriptor:
        """Read a file from disk and ingest it, using its path as the platform hint.

        With root given, only the part of the path below root is used as
        the hint, like the relative path of a directory upload.

        Raises:
            ReadFailure: the file could not be read
        """
        path = Path(path)
        if _extension(path.name) not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormat(path.name)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ReadFailure(path.name, e) from e
        return self.ingest(data, path.name, _hint(path, root))

    def ingest_and_register(self, data: bytes, name: str, declared_path: Optional[str] = None) -> FileDescriptor:
        descriptor = self.ingest(data, name, declared_path)
        self.registry.add(descriptor)
        return descriptor

    async def ingest_many(
        self,
        sources: Sequence[Union[IngestSource, str, Path]],
        root: Union[str, Path, None] = None,
    ) -> list[IngestOutcome]:
        """Ingest many files concurrently.

        In-memory sources (IngestSource) and file paths can be mixed. Each
        file is parsed in a worker thread; successes are appended to the
        registry in completion order. File paths are resolved against root
        for their platform hint, see ingest_path().

        Returns:
            One IngestOutcome per source, in submission order
        """
        if not sources:
            return []

        limit = self._config.max_concurrent_reads
        semaphore = asyncio.Semaphore(limit) if limit and limit > 0 else None

        tasks = [self._ingest_one(source, semaphore, root) for source in sources]
        outcomes = await asyncio.gather(*tasks)

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        logger.info("Ingested %d/%d files (%d failed)", len(outcomes) - failed, len(outcomes), failed)
        return list(outcomes)

    async def _ingest_one(
        self,
        source: Union[IngestSource, str, Path],
        semaphore: Optional[asyncio.Semaphore],
        root: Union[str, Path, None] = None,
    ) -> IngestOutcome:
        name = source.name if isinstance(source, (IngestSource, Path)) else Path(source).name

        try:
            if semaphore is not None:
                async with semaphore:
                    descriptor = await asyncio.to_thread(self._parse_source, source, root)
            else:
                descriptor = await asyncio.to_thread(self._parse_source, source, root)
        except IngestionError as e:
            logger.warning("Skipping %s: %s", name, e)
            return IngestOutcome(name=name, error=e)
        except Exception as e:
            logger.exception("Unexpected error while ingesting %s", name)
            error = MalformedInput(name, f"Unexpected error ({e!r})")
            error.__cause__ = e
            return IngestOutcome(name=name, error=error)

        self.registry.add(descriptor)
        return IngestOutcome(name=name, descriptor=descriptor)

    def _parse_source(self, source: Union[IngestSource, str, Path], root=None) -> FileDescriptor:
        if isinstance(source, IngestSource):
            return self.ingest(source.data, source.name, source.path)
        return self.ingest_path(source, root)

    def _decode(self, data: bytes, name: str) -> str:
        try:
            return data.decode(self._config.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise MalformedInput(name, f"Cannot decode file as {self._config.encoding} ({e})") from e

    @staticmethod
    def _parse_json(text: str, name: str) -> list[RawRecord]:
        try:
            parsed: Any = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise MalformedInput(name, f"Invalid JSON ({e})") from e

        if not isinstance(parsed, list):
            raise MalformedInput(name)
        return parsed

    @staticmethod
    def _parse_csv(text: str, name: str) -> list[RawRecord]:
        if csv.field_size_limit() < CSV_FIELD_SIZE_LIMIT:
            csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)
        try:
            reader = csv.DictReader(io.StringIO(text, newline=""), restkey=CSV_EXTRA_KEY)
            return [dict(row) for row in reader if _has_content(row)]
        except csv.Error as e:
            raise MalformedInput(name, f"Invalid CSV ({e})") from e


def _hint(path: Path, root: Union[str, Path, None]) -> str:
    if root is None:
        return str(path)
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        # outside root, or relative vs. absolute
        return str(path)


def _extension(name: str) -> str:
    return Path(name).suffix.lower()


def _has_content(row: dict) -> bool:
    for key, value in row.items():
        if key == CSV_EXTRA_KEY:
            if any(cell for cell in value):
                return True
        elif value:
            return True
    return False
