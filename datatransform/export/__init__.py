# ==============================================
# TOPIC 4: EXPORT (serialization + archive)
# ==============================================
#
# This package handles turning unified records into downloadable
# bytes. Nothing here is written to disk.
#
# Modules:
# --------
# - serializers.py → JSON (pretty) and CSV (BOM, inferred header)
# - archive.py     → In-memory zip of all files of one batch
#
# ==============================================

from .serializers import serialize, to_csv_bytes, to_json_bytes
from .archive import ArchiveBuilder, archive_file_name

__all__ = ["serialize", "to_csv_bytes", "to_json_bytes", "ArchiveBuilder", "archive_file_name"]
