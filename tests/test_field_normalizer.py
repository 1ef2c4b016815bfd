# ==============================================
# Tests for FieldNormalizer
# ==============================================

import pytest

from datatransform.models import COMMENT_FIELDS, CONTENT_FIELDS, DataKind, OutputFormat, Platform
from datatransform.normalization import FieldNormalizer


@pytest.fixture
def normalizer():
    return FieldNormalizer()


# ==============================================
# Content mapping
# ==============================================

class TestNormalizeContent:
    """Platform content records -> UnifiedContent."""

    def test_xhs_note(self, normalizer, xhs_note):
        [out] = normalizer.normalize_content([xhs_note], Platform.XHS)
        assert out["id"] == xhs_note["note_id"]
        assert out["title"] == "周末去哪儿"
        assert out["content"] == "城市周边露营攻略"
        assert out["create_time"] == 1700000000000
        assert out["liked_count"] == 15000
        assert out["comment_count"] == 320
        assert out["share_count"] == 45
        assert out["url"] == xhs_note["note_url"]
        assert out["platform"] == "xhs"

    def test_douyin_seconds_and_empty_title(self, normalizer, douyin_video):
        [out] = normalizer.normalize_content([douyin_video], Platform.DOUYIN)
        assert out["id"] == douyin_video["aweme_id"]
        assert out["title"] == "日落"  # empty title falls back to desc
        assert out["create_time"] == 1700000000000
        assert out["liked_count"] == 32000
        assert out["url"] == douyin_video["aweme_url"]

    def test_bili_video_comment(self, normalizer, bili_video):
        [out] = normalizer.normalize_content([bili_video], Platform.BILI)
        assert out["id"] == "BV1xx411c7mD"
        assert out["comment_count"] == 88
        assert out["liked_count"] == 500

    def test_weibo_alternate_names(self, normalizer, weibo_note):
        [out] = normalizer.normalize_content([weibo_note], Platform.WEIBO)
        assert out["comment_count"] == 20
        assert out["share_count"] == 5
        assert out["title"] == ""  # no title / desc on weibo posts
        assert out["content"] == "今天天气不错"

    def test_end_to_end_record(self, normalizer):
        records = [{"video_id": "v1", "video_comment": 10, "like_count": "3千"}]
        [out] = normalizer.normalize_content(records, Platform.BILI)
        assert out["comment_count"] == 10
        assert out["id"] == "v1"
        assert out["like_count"] == "3千"  # not canonical for content, passed through

    def test_defaults_for_empty_record(self, normalizer):
        [out] = normalizer.normalize_content([{}], Platform.UNKNOWN)
        assert out["id"] == ""
        assert out["title"] == ""
        assert out["liked_count"] == 0
        assert out["comment_count"] == 0
        assert out["share_count"] == 0
        assert isinstance(out["create_time"], int)

    def test_canonical_key_order(self, normalizer, xhs_note):
        [out] = normalizer.normalize_content([xhs_note], Platform.XHS)
        assert tuple(out)[:len(CONTENT_FIELDS)] == CONTENT_FIELDS


# ==============================================
# Comment mapping
# ==============================================

class TestNormalizeComment:
    """Platform comment records -> UnifiedComment."""

    def test_xhs_comment(self, normalizer, xhs_comment):
        [out] = normalizer.normalize_comment([xhs_comment], Platform.XHS)
        assert out["comment_id"] == "c-1001"
        assert out["content_id"] == xhs_comment["note_id"]
        assert out["content"] == "收藏了"
        assert out["like_count"] == 12
        assert out["sub_comment_count"] == 3
        assert out["parent_comment_id"] == 0
        assert out["create_time"] == 1700000100000

    def test_comment_like_count_fallback(self, normalizer):
        [out] = normalizer.normalize_comment(
            [{"comment_id": "c", "aweme_id": "a", "comment_like_count": "1.1万"}], Platform.DOUYIN
        )
        assert out["like_count"] == 11000
        assert out["content_id"] == "a"

    def test_missing_parent_is_root(self, normalizer):
        [out] = normalizer.normalize_comment([{"comment_id": "c"}], Platform.XHS)
        assert out["parent_comment_id"] == 0
        assert out["sub_comment_count"] == 0
        assert out["content"] == ""

    def test_parent_kept(self, normalizer):
        [out] = normalizer.normalize_comment([{"comment_id": "c", "parent_comment_id": "p-9"}], Platform.XHS)
        assert out["parent_comment_id"] == "p-9"

    def test_canonical_key_order(self, normalizer, xhs_comment):
        [out] = normalizer.normalize_comment([xhs_comment], Platform.XHS)
        assert tuple(out)[:len(COMMENT_FIELDS)] == COMMENT_FIELDS


# ==============================================
# Invariants
# ==============================================

class TestInvariants:
    def test_pass_through_fields(self, normalizer, xhs_note):
        [out] = normalizer.normalize_content([xhs_note], Platform.XHS)
        for key in ("note_id", "type", "desc", "collected_count", "tag_list", "note_url", "last_update_time"):
            assert out[key] == xhs_note[key]

    def test_canonical_not_overwritten(self, normalizer):
        record = {"note_id": "n1", "id": "raw-id", "platform": "raw", "liked_count": "2千"}
        [out] = normalizer.normalize_content([record], Platform.XHS)
        assert out["id"] == "n1"
        assert out["platform"] == "xhs"
        assert out["liked_count"] == 2000

    def test_count_and_order_preserved(self, normalizer):
        records = [{"note_id": str(i)} for i in range(50)] + [{}, "garbage", None]
        out = normalizer.normalize_content(records, Platform.XHS)
        assert len(out) == len(records)
        assert [o["id"] for o in out[:50]] == [str(i) for i in range(50)]

    def test_comment_count_preserved(self, normalizer, xhs_comment):
        out = normalizer.normalize_comment([xhs_comment] * 7, Platform.XHS)
        assert len(out) == 7

    def test_source_record_not_mutated(self, normalizer, xhs_note):
        snapshot = dict(xhs_note)
        normalizer.normalize_content([xhs_note], Platform.XHS)
        assert xhs_note == snapshot

    def test_hostile_values_never_raise(self, normalizer):
        records = [
            {"note_id": "n", "time": "1e400", "liked_count": "1e400万", "comment_count": float("nan")},
            {"comment_id": "c", "create_time": float("inf"), "like_count": ["x"]},
        ]
        content = normalizer.normalize_content(records, Platform.XHS)
        comments = normalizer.normalize_comment(records, Platform.XHS)
        assert len(content) == len(comments) == 2
        assert isinstance(content[0]["create_time"], int)
        assert content[0]["liked_count"] == 0
        assert content[0]["comment_count"] == 0
        assert comments[1]["like_count"] == 0

    def test_dispatch_by_kind(self, normalizer, xhs_comment):
        [out] = normalizer.normalize([xhs_comment], DataKind.COMMENT, Platform.XHS)
        assert "comment_id" in out and "content_id" in out


class TestOutputFileName:
    @pytest.mark.parametrize("platform, name, fmt, expected", [
        (Platform.BILI, "p1.json", OutputFormat.JSON, "bili-p1-formatted.json"),
        ("xhs", "notes.CSV", "json", "xhs-notes-formatted.json"),
        (Platform.DOUYIN, "a.json.bak", OutputFormat.CSV, "douyin-a.json.bak-formatted.csv"),
        (Platform.UNKNOWN, "export.v2.csv", OutputFormat.CSV, "unknown-export.v2-formatted.csv"),
    ])
    def test_file_name(self, platform, name, fmt, expected):
        assert FieldNormalizer.output_file_name(platform, name, fmt) == expected
