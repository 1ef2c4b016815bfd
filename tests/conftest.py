# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# - Raw records shaped like each platform's crawler export
# - Ready-made FileDescriptors
# - Fresh registry / ingestor / orchestrator per test
# - write_file(): drop a file under tmp_path
#
# ==============================================

import json

import pytest

from datatransform.config import ExportConfig, IngestConfig
from datatransform.ingestion import FileIngestor, IngestionRegistry
from datatransform.models import DataKind, FileDescriptor, Platform
from datatransform.transform_orchestrator import BatchTransformOrchestrator


# ==============================================
# Raw records
# ==============================================

@pytest.fixture
def xhs_note():
    return {
        "note_id": "64f1a2b3000000001e03c4d5",
        "type": "normal",
        "title": "周末去哪儿",
        "desc": "城市周边露营攻略",
        "time": 1700000000000,
        "last_update_time": 1700000500000,
        "user_id": "5a1b2c3d",
        "nickname": "露营小能手",
        "avatar": "https://sns-avatar.example.com/a.jpg",
        "liked_count": "1.5万",
        "collected_count": "2千",
        "comment_count": "320",
        "share_count": "45",
        "ip_location": "上海",
        "note_url": "https://www.xiaohongshu.com/explore/64f1a2b3000000001e03c4d5",
        "source_keyword": "露营",
        "tag_list": "露营,周末",
    }


@pytest.fixture
def xhs_comment():
    return {
        "comment_id": "c-1001",
        "create_time": 1700000100000,
        "ip_location": "北京",
        "note_id": "64f1a2b3000000001e03c4d5",
        "content": "收藏了",
        "sub_comment_count": "3",
        "like_count": "12",
        "parent_comment_id": 0,
        "user_id": "u-1",
        "nickname": "路人甲",
        "avatar": "",
    }


@pytest.fixture
def douyin_video():
    return {
        "aweme_id": "7300000000000000001",
        "aweme_type": "0",
        "title": "",
        "desc": "日落",
        "create_time": 1700000000,
        "user_id": "d-1",
        "nickname": "抖音用户",
        "liked_count": "3.2万",
        "comment_count": "1024",
        "share_count": "88",
        "aweme_url": "https://www.douyin.com/video/7300000000000000001",
    }


@pytest.fixture
def bili_video():
    return {
        "video_id": "BV1xx411c7mD",
        "video_type": "video",
        "title": "编程入门",
        "desc": "第一集",
        "create_time": 1700000000,
        "user_id": "b-1",
        "nickname": "UP主",
        "liked_count": 500,
        "video_play_count": "1.2万",
        "video_danmaku": "300",
        "video_comment": "88",
        "video_url": "https://www.bilibili.com/video/BV1xx411c7mD",
    }


@pytest.fixture
def kuaishou_video():
    return {
        "video_id": "3xabc",
        "video_type": "1",
        "title": "快手视频",
        "desc": "描述",
        "create_time": 1700000000000,
        "user_id": "k-1",
        "nickname": "老铁",
        "liked_count": "2千",
        "viewd_count": "5万",
        "video_url": "https://www.kuaishou.com/short-video/3xabc",
        "video_play_url": "https://cdn.example.com/3xabc.mp4",
    }


@pytest.fixture
def weibo_note():
    return {
        "note_id": "4950000000000001",
        "content": "今天天气不错",
        "create_time": 1700000000,
        "create_date_time": "2023-11-14 22:13:20",
        "liked_count": "100",
        "comments_count": "20",
        "shared_count": "5",
        "note_url": "https://m.weibo.cn/detail/4950000000000001",
        "ip_location": "广东",
        "user_id": "w-1",
        "nickname": "微博用户",
        "gender": "f",
    }


# ==============================================
# Descriptors and components
# ==============================================

def make_descriptor(name, records, platform=Platform.XHS, kind=DataKind.CONTENT):
    return FileDescriptor(
        name=name,
        path=name,
        size=len(json.dumps(records, default=repr).encode("utf-8")),
        kind=kind,
        platform=platform,
        record_count=len(records),
        records=records,
    )


@pytest.fixture
def descriptor_factory():
    return make_descriptor


@pytest.fixture
def registry():
    return IngestionRegistry()


@pytest.fixture
def ingestor(registry):
    return FileIngestor(registry, IngestConfig())


@pytest.fixture
def orchestrator():
    return BatchTransformOrchestrator(ExportConfig())


@pytest.fixture
def write_file(tmp_path):
    """Write text or bytes to tmp_path / relative and return the path."""
    def _write(relative, content):
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
        return target
    return _write
