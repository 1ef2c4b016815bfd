# ==============================================
# FieldNormalizer
# ==============================================
#
# PURPOSE:
#   Map each platform's heterogeneous record schema onto one of two
#   canonical shapes: UnifiedContent or UnifiedComment.
#
# WHY THIS CLASS EXISTS:
#   The same logical field arrives under different names per platform:
#     - "note_id", "aweme_id", "video_id"          → id
#     - "comment_count", "comments_count",
#       "video_comment"                             → comment_count
#     - "like_count", "comment_like_count"          → like_count
#   and counts arrive as "1.5万" strings, timestamps as seconds or ms.
#
# CLASS: FieldNormalizer
# ----------------------
#   Stateless. Takes raw records in, returns new dicts out.
#
#   Methods:
#   --------
#   - normalize_content(records, platform) -> list[dict]
#   - normalize_comment(records, platform) -> list[dict]
#   - normalize(records, kind, platform) -> list[dict]
#   - output_file_name(platform, original_name, fmt) -> str  (staticmethod)
#
# RULES:
# ------
#   1. Each canonical key takes the first SET source candidate
#      (None, "", 0 and False count as unset)
#   2. Counts go through ValueCoercer.coerce_number()
#   3. Timestamps go through ValueCoercer.to_epoch_millis()
#   4. Every source key not already canonical is copied verbatim
#   5. Never raises, never drops or reorders records
#
# ==============================================

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from datatransform.models import DataKind, OutputFormat, Platform, RawRecord
from .value_coercer import ValueCoercer


@dataclass(frozen=True)
class FieldRule:
    """Where one canonical field comes from."""
    sources: Tuple[str, ...]
    default: Any = ""
    coerce: Optional[Callable[[Any], Any]] = None


CONTENT_FIELD_MAP: Dict[str, FieldRule] = {
    "id": FieldRule(("note_id", "aweme_id", "video_id")),
    "title": FieldRule(("title", "desc")),
    "content": FieldRule(("desc", "content", "title")),
    "create_time": FieldRule(
        ("time", "create_time", "last_update_time"),
        default=None,
        coerce=ValueCoercer.to_epoch_millis,
    ),
    "user_id": FieldRule(("user_id",)),
    "nickname": FieldRule(("nickname",)),
    "avatar": FieldRule(("avatar",)),
    "liked_count": FieldRule(("liked_count",), default=0, coerce=ValueCoercer.coerce_number),
    "comment_count": FieldRule(
        ("comment_count", "comments_count", "video_comment"),
        default=0,
        coerce=ValueCoercer.coerce_number,
    ),
    "share_count": FieldRule(
        ("share_count", "shared_count", "video_share_count"),
        default=0,
        coerce=ValueCoercer.coerce_number,
    ),
    "url": FieldRule(("note_url", "aweme_url", "video_url")),
    "ip_location": FieldRule(("ip_location",)),
    "source_keyword": FieldRule(("source_keyword",)),
}

COMMENT_FIELD_MAP: Dict[str, FieldRule] = {
    "comment_id": FieldRule(("comment_id",)),
    "create_time": FieldRule(("create_time",), default=None, coerce=ValueCoercer.to_epoch_millis),
    # Foreign key to the owning content record, not the comment's own id
    "content_id": FieldRule(("note_id", "aweme_id", "video_id")),
    "content": FieldRule(("content",)),
    "user_id": FieldRule(("user_id",)),
    "nickname": FieldRule(("nickname",)),
    "avatar": FieldRule(("avatar",)),
    "like_count": FieldRule(
        ("like_count", "comment_like_count"),
        default=0,
        coerce=ValueCoercer.coerce_number,
    ),
    # 0 marks a root-level comment
    "parent_comment_id": FieldRule(("parent_comment_id",), default=0),
    "sub_comment_count": FieldRule(("sub_comment_count",), default=0, coerce=ValueCoercer.coerce_number),
    "ip_location": FieldRule(("ip_location",)),
}

_SOURCE_EXTENSION = re.compile(r'\.(json|csv)$', re.IGNORECASE)


class FieldNormalizer:
    """
    Converts raw platform records into UnifiedContent / UnifiedComment dicts.
    Canonical keys come first in a fixed order, pass-through keys follow
    in source order.
    """

    def __init__(
        self,
        content_map: Optional[Dict[str, FieldRule]] = None,
        comment_map: Optional[Dict[str, FieldRule]] = None
    ):
        """
        Initialize the normalizer.

        Args:
            content_map: Override for CONTENT_FIELD_MAP
            comment_map: Override for COMMENT_FIELD_MAP
        """
        self._content_map = content_map or CONTENT_FIELD_MAP
        self._comment_map = comment_map or COMMENT_FIELD_MAP

    def normalize_content(self, records: List[RawRecord], platform: Union[Platform, str]) -> List[dict]:
        """
        Normalize content (post/video/note) records.

        Args:
            records: Raw records in source order
            platform: Detected platform, stamped onto every output record

        Returns:
            One UnifiedContent dict per input record, same order
        """
        return [self._map_record(record, self._content_map, platform) for record in records]

    def normalize_comment(self, records: List[RawRecord], platform: Union[Platform, str]) -> List[dict]:
        """
        Normalize comment records.

        Args:
            records: Raw records in source order
            platform: Detected platform, stamped onto every output record

        Returns:
            One UnifiedComment dict per input record, same order
        """
        return [self._map_record(record, self._comment_map, platform) for record in records]

    def normalize(self, records: List[RawRecord], kind: DataKind, platform: Union[Platform, str]) -> List[dict]:
        """Dispatch on the classified kind of the batch."""
        if DataKind(kind) == DataKind.COMMENT:
            return self.normalize_comment(records, platform)
        return self.normalize_content(records, platform)

    @staticmethod
    def output_file_name(
        platform: Union[Platform, str],
        original_name: str,
        fmt: Union[OutputFormat, str]
    ) -> str:
        """
        Build "{platform}-{stem}-formatted.{fmt}".

        Examples:
            ("bili", "p1.json", "json") -> "bili-p1-formatted.json"
            ("xhs", "notes.CSV", "json") -> "xhs-notes-formatted.json"
        """
        stem = _SOURCE_EXTENSION.sub("", original_name)
        return f"{_value(platform)}-{stem}-formatted.{_value(fmt)}"

    def _map_record(self, record: Any, field_map: Dict[str, FieldRule], platform: Union[Platform, str]) -> dict:
        if not isinstance(record, dict):
            record = {}

        unified = {}
        for canonical, rule in field_map.items():
            value = _first_set(record, rule.sources, rule.default)
            if rule.coerce is not None:
                value = rule.coerce(value)
            unified[canonical] = value
        unified["platform"] = _value(platform)

        # Pass-through: keep everything the canonical shape doesn't claim
        for key, value in record.items():
            if key not in unified:
                unified[key] = value

        return unified


def _is_set(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _first_set(record: RawRecord, sources: Tuple[str, ...], default: Any) -> Any:
    for key in sources:
        value = record.get(key)
        if _is_set(value):
            return value
    return default


def _value(item: Union[Platform, OutputFormat, str]) -> str:
    return item.value if hasattr(item, "value") else str(item)
