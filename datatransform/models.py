# ==============================================
# Models (Enums + Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes shared by every topic: what an ingested file looks
#   like, what a transform produces, and the canonical key sets of the
#   two unified record shapes.
#
# ENUMS:
# ------
# - Platform(str, Enum): XHS, DOUYIN, BILI, KUAISHOU, WEIBO, UNKNOWN
# - DataKind(str, Enum): CONTENT, COMMENT
# - OutputFormat(str, Enum): JSON, CSV
#
# CLASSES:
# --------
# - FileDescriptor (dataclass)   → One ingested file + its raw records
# - TransformResult (dataclass)  → One normalized file, ready to serialize
# - TransformProgress (dataclass)→ completed/total after each file
# - TransformArchive (dataclass) → Final zip bytes + download name
#
# CONSTANTS:
# ----------
# - CONTENT_FIELDS / COMMENT_FIELDS → canonical keys, in output order
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List


RawRecord = Dict[str, Any]


class Platform(str, Enum):
    """Crawl sources a record batch can come from."""
    XHS = "xhs"
    DOUYIN = "douyin"
    BILI = "bili"
    KUAISHOU = "kuaishou"
    WEIBO = "weibo"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return PLATFORM_DISPLAY_NAMES[self]


PLATFORM_DISPLAY_NAMES = {
    Platform.XHS: "小红书",
    Platform.DOUYIN: "抖音",
    Platform.BILI: "哔哩哔哩",
    Platform.KUAISHOU: "快手",
    Platform.WEIBO: "微博",
    Platform.UNKNOWN: "未知",
}


class DataKind(str, Enum):
    """Whether a batch holds posts/videos or comments on them."""
    CONTENT = "content"
    COMMENT = "comment"


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


# Canonical keys of UnifiedContent, in output order
CONTENT_FIELDS = (
    "id",
    "title",
    "content",
    "create_time",
    "user_id",
    "nickname",
    "avatar",
    "liked_count",
    "comment_count",
    "share_count",
    "url",
    "ip_location",
    "source_keyword",
    "platform",
)

# Canonical keys of UnifiedComment, in output order
COMMENT_FIELDS = (
    "comment_id",
    "create_time",
    "content_id",
    "content",
    "user_id",
    "nickname",
    "avatar",
    "like_count",
    "parent_comment_id",
    "sub_comment_count",
    "ip_location",
    "platform",
)


@dataclass
class FileDescriptor:
    """
    One ingested file.

    `path` is the best-known source path and is only used as a hint for
    platform detection. `records` keeps source order.
    """
    name: str
    path: str
    size: int
    kind: DataKind
    platform: Platform
    record_count: int
    records: List[RawRecord] = field(default_factory=list, repr=False)

    def to_summary(self) -> Dict[str, Any]:
        """
        Display row for a file table.

        Returns:
            Dictionary with name, platform tag, kind, count and size
        """
        return {
            "name": self.name,
            "platform": self.platform.value,
            "platform_name": self.platform.display_name,
            "kind": self.kind.value,
            "record_count": self.record_count,
            "size": self.size,
            "size_kb": f"{self.size / 1024:.2f} KB",
        }


@dataclass
class TransformResult:
    """Normalized output of one FileDescriptor."""
    file_name: str
    original_file_name: str
    kind: DataKind
    count: int
    data: List[Dict[str, Any]] = field(default_factory=list, repr=False)


@dataclass
class TransformProgress:
    """Emitted to the progress observer after every file."""
    completed: int
    total: int

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.completed * 100.0 / self.total


@dataclass
class TransformArchive:
    """A finished zip, handed back to the caller as one object."""
    file_name: str
    content: bytes = field(repr=False)
    entries: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.content)
