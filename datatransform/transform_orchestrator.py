# ==============================================
# BatchTransformOrchestrator: Final Orchestrator
# ==============================================
#
# PURPOSE:
#   Pull a selection of ingested files through normalization and
#   serialization and pack everything into one zip.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │               BatchTransformOrchestrator                 │
#   │                                                          │
#   │   selected: [FileDescriptor, ...]  (caller's order)      │
#   │                 │ one file at a time                     │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: NORMALIZATION                       │        │
#   │  │  FieldNormalizer → ValueCoercer              │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ TransformResult                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 4: EXPORT                              │        │
#   │  │  serialize() → ArchiveBuilder.add()          │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ after EVERY file                       │
#   │                 ▼                                        │
#   │         on_progress(TransformProgress)                   │
#   │                                                          │
#   │   all files done → ArchiveBuilder.build() → zip bytes    │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: BatchTransformOrchestrator
# ---------------------------------
#
#   Constructor:
#   ------------
#   - __init__(config: ExportConfig | None = None,
#              normalizer: FieldNormalizer | None = None)
#
#   Public Methods:
#   ---------------
#   - transform(selected, target_format, on_progress=None) -> TransformArchive
#       All-or-nothing:
#         1. Empty selection → NoInputSelected (no progress events),
#            unknown format → UnsupportedOutputFormat
#         2. For each file, in order: normalize, serialize, add entry,
#            report progress
#         3. Any failure → TransformFailed, nothing is returned
#         4. Build the zip once, hand it back
#
#   - transform_file(descriptor, target_format) -> TransformResult
#       Normalize a single file without serializing it.
#
# ==============================================

import logging
import time
from datetime import date
from typing import Callable, Optional, Sequence, Union

from datatransform.config import ExportConfig
from datatransform.exceptions import NoInputSelected, TransformFailed, UnsupportedOutputFormat
from datatransform.export import ArchiveBuilder, archive_file_name, serialize
from datatransform.models import (
    FileDescriptor,
    OutputFormat,
    Platform,
    TransformArchive,
    TransformProgress,
    TransformResult,
)
from datatransform.normalization import FieldNormalizer

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[TransformProgress], None]


class BatchTransformOrchestrator:
    """
    Sequential, all-or-nothing batch transform.

    Files are processed strictly in the order given so that progress
    is monotonic; nothing is parallelized across files.
    """

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        normalizer: Optional[FieldNormalizer] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Export configuration. Defaults are used if None.
            normalizer: FieldNormalizer to use. A default one if None.
        """
        self._config = config or ExportConfig()
        self._normalizer = normalizer or FieldNormalizer()

    def transform(
        self,
        selected: Sequence[FileDescriptor],
        target_format: Union[OutputFormat, str, None] = None,
        on_progress: Optional[ProgressObserver] = None,
        day: Optional[date] = None
    ) -> TransformArchive:
        """
        Transform the selected files and pack them into one zip.

        Args:
            selected: Files to transform, in processing order
            target_format: "json" or "csv"; the configured default if None
            on_progress: Called with TransformProgress after every file
            day: Date used in the archive name (today if None)

        Returns:
            TransformArchive with zip bytes, download name and entry names

        Raises:
            NoInputSelected: selection is empty
            UnsupportedOutputFormat: target_format is not json or csv
            TransformFailed: any file failed; no partial archive is produced
        """
        if not selected:
            raise NoInputSelected()

        fmt = self._resolve_format(target_format)
        total = len(selected)
        builder = ArchiveBuilder(deduplicate=self._config.deduplicate_names)
        start_time = time.time()

        logger.info("Transforming %d files to %s", total, fmt.value)

        for index, descriptor in enumerate(selected, start=1):
            try:
                result = self.transform_file(descriptor, fmt)
                content = serialize(
                    result.data,
                    fmt,
                    json_indent=self._config.json_indent,
                    csv_bom=self._config.csv_bom
                )
            except Exception as e:
                logger.error("Transform aborted at %s (%d/%d): %s", descriptor.name, index, total, e)
                raise TransformFailed(descriptor.name, e) from e

            entry_name = builder.add(result.file_name, content)
            logger.debug("Wrote %s (%d records, %d bytes)", entry_name, result.count, len(content))

            if on_progress is not None:
                on_progress(TransformProgress(completed=index, total=total))

        try:
            content = builder.build()
        except Exception as e:
            raise TransformFailed("<archive>", e) from e

        archive = TransformArchive(
            file_name=archive_file_name(fmt, day),
            content=content,
            entries=builder.entries,
        )

        elapsed = time.time() - start_time
        logger.info(
            "Transformed %d files into %s (%d entries, %d bytes) in %.2fs",
            total, archive.file_name, len(archive.entries), archive.size, elapsed,
        )
        return archive

    def transform_file(
        self,
        descriptor: FileDescriptor,
        target_format: Union[OutputFormat, str, None] = None
    ) -> TransformResult:
        """
        Normalize one file according to its classified kind.

        Args:
            descriptor: Ingested file
            target_format: Only used for the derived file name

        Returns:
            TransformResult with count == descriptor.record_count
        """
        fmt = self._resolve_format(target_format)
        platform = descriptor.platform or Platform.UNKNOWN

        data = self._normalizer.normalize(descriptor.records, descriptor.kind, platform)

        return TransformResult(
            file_name=FieldNormalizer.output_file_name(platform, descriptor.name, fmt),
            original_file_name=descriptor.name,
            kind=descriptor.kind,
            count=len(data),
            data=data,
        )

    def _resolve_format(self, target_format: Union[OutputFormat, str, None]) -> OutputFormat:
        value = target_format or self._config.default_format
        try:
            return OutputFormat(value.lower() if isinstance(value, str) else value)
        except ValueError as e:
            raise UnsupportedOutputFormat(str(value)) from e
