# ==============================================
# PlatformDetector
# ==============================================
#
# PURPOSE:
#   Infer which crawl platform produced a batch of records.
#
# WHY THIS CLASS EXISTS:
#   Crawler exports don't carry a platform tag. Batch exports are
#   usually laid out in per-platform directories, loose uploads
#   are not, so we need two sources of evidence.
#
# CLASS: PlatformDetector
# -----------------------
#   Stateless: records (and an optional path) in, Platform out.
#
#   Methods:
#   --------
#   - detect(records, path=None) -> Platform
#   - detect_from_path(path) -> Platform | None
#   - detect_from_shape(records) -> Platform
#
#   PHASE 1: PATH RULES (case-insensitive substring, in order)
#     douyin → bili / bilibili → kuaishou / ks → xhs / xiaohongshu → weibo
#
#   PHASE 2: SHAPE RULES (first record only, in order)
#     RULE 1: aweme_id                                  → douyin
#     RULE 2: video_id + video_comment|video_danmaku key → bili
#     RULE 3: video_id + video_play_url                 → kuaishou
#     RULE 4: video_id                                  → bili
#     RULE 5: note_id + gender key | create_date_time   → weibo
#     RULE 6: note_id + type|tag_list key               → xhs
#     RULE 7: note_id + comment_id                      → xhs
#     RULE 8: note_id                                   → xhs
#     otherwise                                         → unknown
#
#   The fallback rules (4, 8) are legacy heuristics kept as-is.
#
# ==============================================

import logging
from typing import List, Optional

from datatransform.models import Platform, RawRecord
from .rules import Rule, all_of, any_of, first_match, has_key, has_value, path_contains

logger = logging.getLogger(__name__)


class PlatformDetector:
    """
    Two-phase, priority-ordered platform detection.
    Path hints win over record shape.
    """

    PATH_RULES: List[Rule] = [
        Rule("path:douyin", path_contains("douyin"), Platform.DOUYIN),
        Rule("path:bili", path_contains("bili", "bilibili"), Platform.BILI),
        Rule("path:kuaishou", path_contains("kuaishou", "ks"), Platform.KUAISHOU),
        Rule("path:xhs", path_contains("xhs", "xiaohongshu"), Platform.XHS),
        Rule("path:weibo", path_contains("weibo"), Platform.WEIBO),
    ]

    SHAPE_RULES: List[Rule] = [
        Rule("shape:aweme_id", has_value("aweme_id"), Platform.DOUYIN),
        Rule(
            "shape:video_id+bili_stats",
            all_of(has_value("video_id"), any_of(has_key("video_comment"), has_key("video_danmaku"))),
            Platform.BILI,
        ),
        Rule(
            "shape:video_id+video_play_url",
            all_of(has_value("video_id"), has_value("video_play_url")),
            Platform.KUAISHOU,
        ),
        Rule("shape:video_id", has_value("video_id"), Platform.BILI),
        Rule(
            "shape:note_id+weibo_profile",
            all_of(has_value("note_id"), any_of(has_key("gender"), has_value("create_date_time"))),
            Platform.WEIBO,
        ),
        Rule(
            "shape:note_id+xhs_note",
            all_of(has_value("note_id"), any_of(has_key("type"), has_key("tag_list"))),
            Platform.XHS,
        ),
        Rule(
            "shape:note_id+comment_id",
            all_of(has_value("note_id"), has_value("comment_id")),
            Platform.XHS,
        ),
        Rule("shape:note_id", has_value("note_id"), Platform.XHS),
    ]

    @classmethod
    def detect(cls, records: List[RawRecord], path: Optional[str] = None) -> Platform:
        """
        Detect the platform of a record batch.

        Args:
            records: Parsed records; only the first one is inspected
            path: Optional source path used as a hint

        Returns:
            The detected Platform, Platform.UNKNOWN if nothing matched
        """
        from_path = cls.detect_from_path(path)
        if from_path is not None:
            return from_path
        return cls.detect_from_shape(records)

    @classmethod
    def detect_from_path(cls, path: Optional[str]) -> Optional[Platform]:
        if not path:
            return None
        rule = first_match(cls.PATH_RULES, path.lower())
        if rule is None:
            return None
        logger.debug("Platform %s matched by %s (%s)", rule.result.value, rule.name, path)
        return rule.result

    @classmethod
    def detect_from_shape(cls, records: List[RawRecord]) -> Platform:
        if not records:
            return Platform.UNKNOWN

        first = records[0]
        if not isinstance(first, dict):
            return Platform.UNKNOWN

        rule = first_match(cls.SHAPE_RULES, first)
        if rule is None:
            return Platform.UNKNOWN
        logger.debug("Platform %s matched by %s", rule.result.value, rule.name)
        return rule.result
