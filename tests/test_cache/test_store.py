"""Tests for the JSON-backed content-hash store."""

import json

from folio.cache.store import ImageCacheStore
from folio.types import DerivedImageData


def _data(**kwargs) -> DerivedImageData:
    fields = dict(
        available_widths={400, 800},
        placeholder="data:image/jpeg;base64,AAAA",
        dominant_color="#112233",
        aspect_ratio=1.5,
        width=900,
        height=600,
    )
    fields.update(kwargs)
    return DerivedImageData(**fields)


class TestLoad:
    def test_missing_file_is_empty(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        assert store.load() == {}
        assert len(store) == 0

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json")
        store = ImageCacheStore(path)
        assert store.load() == {}

    def test_non_mapping_is_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2, 3]")
        store = ImageCacheStore(path)
        assert store.load() == {}

    def test_malformed_entries_dropped(self, tmp_path):
        path = tmp_path / "cache.json"
        good = {"hash": "abc", "data": _data().model_dump(mode="json")}
        path.write_text(json.dumps({"a/good.jpg": good, "a/bad.jpg": {"nope": 1}}))
        store = ImageCacheStore(path)
        store.load()
        assert store.get("a/good.jpg") is not None
        assert store.get("a/bad.jpg") is None

    def test_load_is_not_dirty(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        store.load()
        assert store.dirty is False


class TestGetPut:
    def test_get_miss(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        assert store.get("nope/x.jpg") is None

    def test_put_then_get(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        store.put("alpha/a.jpg", "h1", _data())
        entry = store.get("alpha/a.jpg")
        assert entry is not None
        assert entry.hash == "h1"
        assert entry.data.available_widths == {400, 800}

    def test_put_marks_dirty(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        store.put("alpha/a.jpg", "h1", _data())
        assert store.dirty is True

    def test_put_replaces_entry_in_full(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        store.put("alpha/a.jpg", "h1", _data(dominant_color="#000000"))
        store.put("alpha/a.jpg", "h2", _data(available_widths={400}, width=500))
        entry = store.get("alpha/a.jpg")
        assert entry.hash == "h2"
        assert entry.data.available_widths == {400}
        assert entry.data.dominant_color == "#112233"
        assert len(store) == 1


class TestPersist:
    def test_not_dirty_does_not_write(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.load()
        assert store.persist() is False
        assert not path.exists()

    def test_unchanged_file_not_rewritten(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        store.persist()
        mtime = path.stat().st_mtime_ns

        reopened = ImageCacheStore(path)
        reopened.load()
        assert reopened.persist() is False
        assert path.stat().st_mtime_ns == mtime

    def test_round_trip(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        assert store.persist() is True
        assert store.dirty is False

        reopened = ImageCacheStore(path)
        reopened.load()
        entry = reopened.get("alpha/a.jpg")
        assert entry.hash == "h1"
        assert entry.data == _data()

    def test_file_layout(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data(available_widths={800, 400}))
        store.persist()

        raw = json.loads(path.read_text())
        assert raw["alpha/a.jpg"]["hash"] == "h1"
        assert raw["alpha/a.jpg"]["data"]["available_widths"] == [400, 800]

    def test_no_temp_file_left(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        store.persist()
        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        assert store.persist() is True
        assert path.exists()

    def test_write_failure_is_logged_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = ImageCacheStore(blocker / "cache.json")
        store.put("alpha/a.jpg", "h1", _data())
        assert store.persist() is False
        assert store.dirty is True


class TestClearAndStats:
    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        store.persist()
        assert store.clear() is True
        assert not path.exists()
        assert len(store) == 0

    def test_clear_without_file(self, tmp_path):
        store = ImageCacheStore(tmp_path / "cache.json")
        assert store.clear() is False

    def test_stats(self, tmp_path):
        path = tmp_path / "cache.json"
        store = ImageCacheStore(path)
        store.put("alpha/a.jpg", "h1", _data())
        store.put("alpha/b.jpg", "h2", _data())
        store.persist()
        stats = store.stats()
        assert stats.entries == 2
        assert stats.size_kb > 0
        assert stats.path == str(path)
        assert stats.dirty is False
