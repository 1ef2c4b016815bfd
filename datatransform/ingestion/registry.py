# ==============================================
# IngestionRegistry
# ==============================================
#
# PURPOSE:
#   Session-scoped, ordered collection of ingested files, keyed by
#   file name. One instance per user session / workflow; it is passed
#   to whoever needs it, never stored in a module global.
#
# CONCURRENCY:
#   Every access goes through one lock. Concurrent ingestions append
#   one at a time, so iteration order is the order in which files
#   finished ingesting, and readers get snapshots.
#
# CLASS: IngestionRegistry
# ------------------------
#   - add(descriptor) -> None     Append; an existing name is replaced
#                                 and moved to the end
#   - remove(name) -> bool
#   - get(name) -> FileDescriptor | None
#   - select(names) -> list[FileDescriptor]   In the order given
#   - list() -> list[FileDescriptor]          Ingestion order
#   - summaries() -> list[dict]               Display rows
#   - clear() -> None
#
# ==============================================

import logging
import threading
from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Optional

from datatransform.models import FileDescriptor

logger = logging.getLogger(__name__)


class IngestionRegistry:
    def __init__(self):
        self._files: "OrderedDict[str, FileDescriptor]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, descriptor: FileDescriptor) -> None:
        with self._lock:
            if descriptor.name in self._files:
                logger.warning("Replacing previously ingested file %s", descriptor.name)
                del self._files[descriptor.name]
            self._files[descriptor.name] = descriptor

    def remove(self, name: str) -> bool:
        with self._lock:
            return self._files.pop(name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._files.clear()

    def get(self, name: str) -> Optional[FileDescriptor]:
        with self._lock:
            return self._files.get(name)

    def select(self, names: Iterable[str]) -> List[FileDescriptor]:
        """
        Pick files by name, keeping the caller's order.

        Raises:
            KeyError: if a name was never ingested
        """
        selected = []
        with self._lock:
            for name in names:
                if name not in self._files:
                    raise KeyError(f"File not ingested: {name}")
                selected.append(self._files[name])
        return selected

    def list(self) -> List[FileDescriptor]:
        """Snapshot in ingestion order; safe to iterate while others add."""
        with self._lock:
            return list(self._files.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._files.keys())

    def summaries(self) -> List[Dict]:
        return [descriptor.to_summary() for descriptor in self.list()]

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[FileDescriptor]:
        return iter(self.list())

    def __contains__(self, name: object) -> bool:
        return name in self._files
