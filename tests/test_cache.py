"""Tests for the work item caching layer."""

import hashlib
import json
import threading
from datetime import UTC, datetime, timedelta

import pytest

from vsonline.config.settings import Settings
from vsonline.integrations.cache import (
    CachedIssue,
    FileBasedIssueCache,
    InMemoryIssueCache,
    IssueCache,
    create_cache,
    get_from_cache_or_fetch,
)
from vsonline.integrations.models import HREF_FIELD, SUMMARY_FIELD, IssueRecord

KEY = "https://acct.visualstudio.com/coll/proj/_workitems/edit/42"
OTHER_KEY = "https://acct.visualstudio.com/coll/proj/_workitems/edit/43"


@pytest.fixture
def sample_record():
    """Create a sample IssueRecord for testing."""
    return IssueRecord(
        id="42",
        fields={SUMMARY_FIELD: "Add login page", HREF_FIELD: "https://example.com/42"},
        feature_request=True,
        url="https://example.com/42",
    )


@pytest.fixture
def other_record():
    return IssueRecord(id="43", fields={SUMMARY_FIELD: "Fix crash"})


class TestCachedIssue:
    """Test CachedIssue expiry."""

    def test_no_expiry(self, sample_record):
        cached = CachedIssue(record=sample_record, cached_at=datetime.now(UTC))
        assert not cached.is_expired

    def test_future_expiry(self, sample_record):
        now = datetime.now(UTC)
        cached = CachedIssue(record=sample_record, cached_at=now, expires_at=now + timedelta(hours=1))
        assert not cached.is_expired

    def test_past_expiry(self, sample_record):
        now = datetime.now(UTC)
        cached = CachedIssue(record=sample_record, cached_at=now, expires_at=now - timedelta(seconds=1))
        assert cached.is_expired


class TestIssueCacheABC:
    def test_cannot_instantiate_abc(self):
        with pytest.raises(TypeError):
            IssueCache()  # type: ignore[abstract]


class TestInMemoryIssueCache:
    """Test InMemoryIssueCache."""

    def test_get_missing(self):
        assert InMemoryIssueCache().get(KEY) is None

    def test_put_and_get(self, sample_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)

        assert cache.get(KEY) == sample_record

    def test_put_overwrites(self, sample_record, other_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)
        cache.put(KEY, other_record)

        assert cache.get(KEY) == other_record
        assert cache.size() == 1

    def test_entries_never_expire_by_default(self, sample_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)

        assert cache.get(KEY) is not None

    def test_expired_entry_is_a_miss(self, sample_record):
        cache = InMemoryIssueCache(default_ttl=timedelta(seconds=-1))
        cache.put(KEY, sample_record)

        assert cache.get(KEY) is None
        assert cache.size() == 0

    def test_lru_eviction(self, sample_record, other_record):
        cache = InMemoryIssueCache(max_size=2)
        cache.put("a", sample_record)
        cache.put("b", other_record)
        cache.get("a")
        cache.put("c", other_record)

        assert cache.get("a") is not None
        assert cache.get("b") is None
        assert cache.get("c") is not None

    def test_unbounded_by_default(self, sample_record):
        cache = InMemoryIssueCache()
        for i in range(100):
            cache.put(str(i), sample_record)

        assert cache.size() == 100

    def test_invalidate(self, sample_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)
        cache.put(OTHER_KEY, sample_record)

        cache.invalidate(KEY)
        cache.invalidate("missing")

        assert cache.get(KEY) is None
        assert cache.get(OTHER_KEY) is not None

    def test_clear(self, sample_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)
        cache.put(OTHER_KEY, sample_record)

        cache.clear()

        assert cache.size() == 0

    def test_concurrent_puts(self, sample_record):
        cache = InMemoryIssueCache()

        def worker(n):
            for i in range(50):
                cache.put(f"{n}-{i}", sample_record)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.size() == 400


class TestFileBasedIssueCache:
    """Test FileBasedIssueCache."""

    def test_put_and_get(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)

        assert cache.get(KEY) == sample_record

    def test_creates_cache_dir(self, tmp_path):
        cache_dir = tmp_path / "nested" / "cache"
        FileBasedIssueCache(cache_dir=cache_dir)

        assert cache_dir.is_dir()

    def test_file_named_by_key_hash(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)

        expected = tmp_path / f"{hashlib.sha256(KEY.encode()).hexdigest()[:32]}.json"
        assert expected.exists()
        data = json.loads(expected.read_text())
        assert data["key"] == KEY
        assert data["record"]["id"] == "42"
        assert data["expires_at"] is None

    def test_persists_across_instances(self, tmp_path, sample_record):
        FileBasedIssueCache(cache_dir=tmp_path).put(KEY, sample_record)

        assert FileBasedIssueCache(cache_dir=tmp_path).get(KEY) == sample_record

    def test_no_temp_files_left(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)

        assert list(tmp_path.glob("*.tmp")) == []

    def test_expired_entry_is_removed(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path, default_ttl=timedelta(seconds=-1))
        cache.put(KEY, sample_record)

        assert cache.get(KEY) is None
        assert cache.size() == 0

    def test_corrupt_file_is_a_miss(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)
        path = cache._get_path(KEY)
        path.write_text("{not json")

        assert cache.get(KEY) is None
        assert not path.exists()

    def test_undecodable_file_is_a_miss(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)
        path = cache._get_path(KEY)
        path.write_bytes(b"\xff\xfe\x00garbage")

        assert cache.get(KEY) is None
        assert not path.exists()

    def test_malformed_entry_is_a_miss(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)
        path = cache._get_path(KEY)
        path.write_text(json.dumps({"key": KEY, "cached_at": "yesterday"}))

        assert cache.get(KEY) is None
        assert not path.exists()

    def test_invalidate_and_clear(self, tmp_path, sample_record):
        cache = FileBasedIssueCache(cache_dir=tmp_path)
        cache.put(KEY, sample_record)
        cache.put(OTHER_KEY, sample_record)

        cache.invalidate(KEY)
        assert cache.get(KEY) is None
        assert cache.size() == 1

        cache.clear()
        assert cache.size() == 0

    def test_write_failure_is_not_raised(self, tmp_path, sample_record, monkeypatch):
        cache = FileBasedIssueCache(cache_dir=tmp_path)

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(cache, "_atomic_write", fail)
        cache.put(KEY, sample_record)

        assert cache.get(KEY) is None


class TestGetFromCacheOrFetch:
    """Test the cache-or-fetch helper."""

    def test_miss_fetches_and_stores(self, sample_record):
        cache = InMemoryIssueCache()
        calls = []

        def fetch():
            calls.append(1)
            return sample_record

        assert get_from_cache_or_fetch(cache, KEY, fetch) == sample_record
        assert cache.get(KEY) == sample_record
        assert len(calls) == 1

    def test_hit_does_not_fetch(self, sample_record):
        cache = InMemoryIssueCache()
        cache.put(KEY, sample_record)

        def fetch():
            raise AssertionError("fetch should not be called")

        assert get_from_cache_or_fetch(cache, KEY, fetch) == sample_record

    def test_failure_propagates_and_stores_nothing(self):
        cache = InMemoryIssueCache()

        def fetch():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            get_from_cache_or_fetch(cache, KEY, fetch)

        assert cache.size() == 0

    def test_keys_are_independent(self, sample_record, other_record):
        cache = InMemoryIssueCache()
        get_from_cache_or_fetch(cache, KEY, lambda: sample_record)

        assert get_from_cache_or_fetch(cache, OTHER_KEY, lambda: other_record) == other_record


class TestCreateCache:
    """Test create_cache factory."""

    def test_default_is_in_memory(self):
        cache = create_cache(Settings())

        assert isinstance(cache, InMemoryIssueCache)
        assert cache.default_ttl is None
        assert cache.max_size == 0

    def test_in_memory_options(self):
        cache = create_cache(Settings(cache_ttl_minutes=5, cache_max_size=10))

        assert cache.default_ttl == timedelta(minutes=5)
        assert cache.max_size == 10

    def test_file_cache(self, tmp_path):
        cache = create_cache(Settings(cache_type="file", cache_dir=str(tmp_path)))

        assert isinstance(cache, FileBasedIssueCache)
        assert cache.cache_dir == tmp_path

    def test_cache_type_is_case_insensitive(self, tmp_path):
        cache = create_cache(Settings(cache_type="File", cache_dir=str(tmp_path)))

        assert isinstance(cache, FileBasedIssueCache)
