# ==============================================
# TOPIC 3: INGESTION
# ==============================================
#
# This package handles turning uploaded bytes into classified
# record batches and keeping them for the session.
#
# Modules:
# --------
# - file_ingestor.py → Parse .json / .csv, detect platform + kind
# - registry.py      → Ordered, lock-guarded session registry
#
# ==============================================

from .registry import IngestionRegistry
from .file_ingestor import FileIngestor, IngestSource, IngestOutcome

__all__ = ["IngestionRegistry", "FileIngestor", "IngestSource", "IngestOutcome"]
