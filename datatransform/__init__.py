# ==============================================
# Crawl Data Transform
# ==============================================
#
# Package Structure (4 Topics + Orchestrator):
#
# datatransform/
# ├── normalization/    # Topic 1: Coerce values, map records onto unified shapes
# ├── analysis/         # Topic 2: Detect platform + content/comment kind
# ├── ingestion/        # Topic 3: Parse .json / .csv uploads, session registry
# ├── export/           # Topic 4: JSON / CSV serialization, zip archive
# ├── models.py         # Enums + data classes shared by all topics
# ├── exceptions.py     # Error taxonomy
# ├── config.py         # Configuration management
# ├── log_config.py     # Logging setup for entry points
# ├── transform_orchestrator.py  # Batch transform orchestrator
# └── pipeline.py       # One operator session + command line entry point
#
# ==============================================

__version__ = "0.1.0"
