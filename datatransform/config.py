# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env file.
#   Provides typed config objects to all other modules.
#
# CLASSES:
# --------
# - IngestConfig (dataclass)
#     max_concurrent_reads: int  (default 0 = unbounded)
#     encoding: str              (default "utf-8-sig")
#
# - ExportConfig (dataclass)
#     default_format: str        (default "json")
#     json_indent: int           (default 2)
#     csv_bom: bool              (default True)
#     deduplicate_names: bool    (default False)
#     output_dir: str            (default "output/")
#
# - AppConfig (dataclass)
#     ingest: IngestConfig
#     export: ExportConfig
#     clear_after_transform: bool (default True)
#     log_level: str              (default "INFO")
#     log_dir: str                (default "" = console only)
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from datatransform.config import get_config
#   config = get_config()
#   print(config.export.default_format)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class IngestConfig:
    """File ingestion configuration."""
    max_concurrent_reads: int = 0
    encoding: str = "utf-8-sig"


@dataclass
class ExportConfig:
    """Serialization and archive configuration."""
    default_format: str = "json"
    json_indent: int = 2
    csv_bom: bool = True
    deduplicate_names: bool = False
    output_dir: str = "output/"


@dataclass
class AppConfig:
    """Main application configuration."""
    ingest: IngestConfig = field(default_factory=IngestConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    clear_after_transform: bool = True
    log_level: str = "INFO"
    log_dir: str = ""


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    ingest_config = IngestConfig(
        max_concurrent_reads=int(os.getenv("INGEST_MAX_CONCURRENT_READS", "0")),
        encoding=os.getenv("INGEST_ENCODING", "utf-8-sig")
    )

    export_config = ExportConfig(
        default_format=os.getenv("EXPORT_DEFAULT_FORMAT", "json").lower(),
        json_indent=int(os.getenv("EXPORT_JSON_INDENT", "2")),
        csv_bom=_env_bool("EXPORT_CSV_BOM", "true"),
        deduplicate_names=_env_bool("EXPORT_DEDUPLICATE_NAMES", "false"),
        output_dir=os.getenv("EXPORT_OUTPUT_DIR", "output/")
    )

    _config_instance = AppConfig(
        ingest=ingest_config,
        export=export_config,
        clear_after_transform=_env_bool("CLEAR_AFTER_TRANSFORM", "true"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "")
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
