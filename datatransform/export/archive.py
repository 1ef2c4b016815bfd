# ==============================================
# ArchiveBuilder
# ==============================================
#
# PURPOSE:
#   Collect serialized files by name and pack them into one
#   in-memory zip once every file of a batch is ready.
#
# COLLISIONS:
#   Two source files can normalize to the same entry name
#   (same platform + same stem from different directories).
#   Default: the later file overwrites the earlier one, with a
#   warning. With deduplicate=True the later file is renamed
#   "name-2.ext", "name-3.ext", ...
#
# CLASS: ArchiveBuilder
# ---------------------
#   - add(name, content) -> str     Returns the entry name actually used
#   - build() -> bytes              Zip bytes (ZIP_DEFLATED)
#   - entries -> list[str]          Entry names in write order
#
# FUNCTION:
# ---------
#   - archive_file_name(fmt, day=None) -> str
#       "data_formatted_{fmt}_{YYYY-MM-DD}.zip"
#
# ==============================================

import io
import logging
import zipfile
from collections import OrderedDict
from datetime import date
from pathlib import PurePosixPath
from typing import List, Optional, Union

from datatransform.models import OutputFormat

logger = logging.getLogger(__name__)


def archive_file_name(fmt: Union[OutputFormat, str], day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"data_formatted_{OutputFormat(fmt).value}_{day.isoformat()}.zip"


class ArchiveBuilder:
    def __init__(self, deduplicate: bool = False):
        self._deduplicate = deduplicate
        self._entries: "OrderedDict[str, bytes]" = OrderedDict()

    @property
    def entries(self) -> List[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, name: str, content: bytes) -> str:
        if name in self._entries:
            if self._deduplicate:
                name = self._next_free_name(name)
            else:
                logger.warning("Archive entry %s overwritten by a later file", name)
                del self._entries[name]
        self._entries[name] = content
        return name

    def build(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in self._entries.items():
                archive.writestr(name, content)
        return buffer.getvalue()

    def _next_free_name(self, name: str) -> str:
        path = PurePosixPath(name)
        counter = 2
        while True:
            candidate = f"{path.stem}-{counter}{path.suffix}"
            if candidate not in self._entries:
                return candidate
            counter += 1
