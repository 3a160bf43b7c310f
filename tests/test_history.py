"""Tests for the saved video history."""

import json
from datetime import datetime

import pytest

from reelmaker.history import STORAGE_KEY, VideoHistory
from reelmaker.models import SavedVideo, Scene


def _video(title="Scene 1 Video", **kwargs):
    return SavedVideo(video_url="https://cdn.example.com/clip.mp4", title=title, **kwargs)


class TestVideoHistory:
    """Persisting and reloading saved videos."""

    def test_defaults_to_configured_path(self, tmp_path):
        history = VideoHistory()

        assert history.path == tmp_path / "history.json"
        assert len(history) == 0

    def test_add_persists_under_storage_key(self, tmp_path):
        path = tmp_path / "videos.json"
        history = VideoHistory(path)

        history.add(_video(scenes=[Scene(id=1, description="A", visual_elements=["x"])]))

        data = json.loads(path.read_text())
        record = data[STORAGE_KEY][0]
        assert record["videoUrl"] == "https://cdn.example.com/clip.mp4"
        assert record["scenes"][0]["visualElements"] == ["x"]
        assert "thumbnailUrl" not in record
        assert not path.with_name("videos.json.tmp").exists()

    def test_reload_rehydrates_dates(self, tmp_path):
        path = tmp_path / "videos.json"
        created = datetime(2024, 5, 1, 6, 30)
        saved = VideoHistory(path).add(_video(created_at=created, description="Sunrise"))

        reloaded = VideoHistory(path)

        assert len(reloaded) == 1
        video = reloaded.get(saved.id)
        assert video.created_at == created
        assert isinstance(video.created_at, datetime)
        assert video.description == "Sunrise"

    def test_delete(self, tmp_path):
        path = tmp_path / "videos.json"
        history = VideoHistory(path)
        keep = history.add(_video("Keep"))
        drop = history.add(_video("Drop"))

        assert history.delete(drop.id) is True
        assert history.delete("missing") is False
        assert [v.id for v in VideoHistory(path)] == [keep.id]

    def test_failed_write_leaves_history_unchanged(self, tmp_path):
        path = tmp_path / "videos.json"
        history = VideoHistory(path)
        kept = history.add(_video("Kept"))
        path.unlink()
        path.mkdir()

        with pytest.raises(OSError):
            history.add(_video("Lost"))
        with pytest.raises(OSError):
            history.delete(kept.id)

        assert [v.id for v in history] == [kept.id]

    def test_soft_deleted_records_are_dropped(self, tmp_path):
        path = tmp_path / "videos.json"
        path.write_text(json.dumps({STORAGE_KEY: [
            {"id": "a", "videoUrl": "u1", "title": "A", "createdAt": "2024-01-01T00:00:00"},
            {"id": "b", "videoUrl": "u2", "title": "B", "createdAt": "2024-01-02T00:00:00", "deleted": True},
        ]}))

        history = VideoHistory(path)

        assert [v.id for v in history] == ["a"]

    def test_invalid_records_are_skipped(self, tmp_path):
        path = tmp_path / "videos.json"
        path.write_text(json.dumps({STORAGE_KEY: [
            {"id": "a", "title": "No URL"},
            {"id": "b", "videoUrl": "u2", "title": "B"},
        ]}))

        assert [v.id for v in VideoHistory(path)] == ["b"]

    @pytest.mark.parametrize("content", ["not json", "[]", '{"savedVideos": "nope"}'])
    def test_unreadable_file_starts_empty(self, tmp_path, content):
        path = tmp_path / "videos.json"
        path.write_text(content)

        assert len(VideoHistory(path)) == 0

    def test_pagination(self, tmp_path):
        history = VideoHistory(tmp_path / "videos.json")
        for i in range(8):
            history.add(_video(f"Video {i}"))

        assert history.page_count() == 2
        assert [v.title for v in history.page(1)] == ["Video 6", "Video 7"]
        assert history.page(5) == []
        assert history.page_count(size=4) == 2

    def test_negative_page(self, tmp_path):
        with pytest.raises(ValueError):
            VideoHistory(tmp_path / "videos.json").page(-1)
