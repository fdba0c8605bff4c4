"""Tests for the on-disk session cache."""

from tempo_insight.cache import CacheStats, SessionCache, session_key
from tempo_insight.temporal import detect_sessions


class TestSessionCache:
    """Tests for SessionCache."""

    def test_round_trip(self, tmp_path, make_commit):
        """A stored result comes back equal."""
        result = detect_sessions([make_commit(1, 0), make_commit(2, 200)], 90)
        with SessionCache(tmp_path / "c") as cache:
            cache.store("k", result)
            assert cache.load("k") == result

    def test_miss(self, tmp_path):
        """Unknown keys return None."""
        with SessionCache(tmp_path / "c") as cache:
            assert cache.load("missing") is None

    def test_persists_across_instances(self, tmp_path, make_commit):
        """Entries survive reopening the cache directory."""
        result = detect_sessions([make_commit(1, 0)], 90)
        with SessionCache(tmp_path / "c") as cache:
            cache.store("k", result)
        with SessionCache(tmp_path / "c") as cache:
            assert cache.load("k") == result

    def test_unexpected_entry_ignored(self, tmp_path):
        """Foreign values under a key are treated as a miss."""
        with SessionCache(tmp_path / "c") as cache:
            cache._store.set("k", {"not": "a result"})
            assert cache.load("k") is None

    def test_clear(self, tmp_path, make_commit):
        """clear() drops every entry and reports the count."""
        result = detect_sessions([make_commit(1, 0)], 90)
        with SessionCache(tmp_path / "c") as cache:
            cache.store("a", result)
            cache.store("b", result)
            assert cache.clear() == 2
            assert cache.load("a") is None
            assert cache.stats().entries == 0

    def test_stats(self, tmp_path, make_commit):
        """stats() reports entry count and location."""
        with SessionCache(tmp_path / "c") as cache:
            cache.store("a", detect_sessions([make_commit(1, 0)], 90))
            stats = cache.stats()
        assert stats.enabled is True
        assert stats.entries == 1
        assert stats.volume_bytes > 0
        assert stats.directory == str(tmp_path / "c")

    def test_disabled(self, tmp_path, make_commit):
        """A disabled cache stores nothing and creates no directory."""
        with SessionCache(tmp_path / "c", enabled=False) as cache:
            cache.store("k", detect_sessions([make_commit(1, 0)], 90))
            assert cache.load("k") is None
            assert cache.clear() == 0
            assert cache.stats() == CacheStats(enabled=False)
        assert not (tmp_path / "c").exists()

    def test_unusable_directory_degrades_to_disabled(self, tmp_path, make_commit):
        """A directory that cannot be created turns the cache off instead of failing."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with SessionCache(blocker / "c") as cache:
            assert cache.enabled is False
            cache.store("k", detect_sessions([make_commit(1, 0)], 90))
            assert cache.load("k") is None
            assert cache.stats() == CacheStats(enabled=False)


class TestSessionKey:
    """Tests for cache key derivation."""

    def test_stable(self):
        """Same inputs, same key."""
        assert session_key("/r", "abc", "3 months ago", None, 90.0) == session_key(
            "/r", "abc", "3 months ago", None, 90.0
        )

    def test_changes_with_inputs(self):
        """HEAD, window, threshold and commit limit all feed the key."""
        base = session_key("/r", "abc", "3 months ago", None, 90.0)
        assert base.startswith("sessions:")
        assert base != session_key("/other", "abc", "3 months ago", None, 90.0)
        assert base != session_key("/r", "def", "3 months ago", None, 90.0)
        assert base != session_key("/r", "abc", "1 year ago", None, 90.0)
        assert base != session_key("/r", "abc", "3 months ago", "2024-01-01", 90.0)
        assert base != session_key("/r", "abc", "3 months ago", None, 60.0)
        assert base == session_key("/r", "abc", "3 months ago", None, 90.0, max_commits=0)
        assert base != session_key("/r", "abc", "3 months ago", None, 90.0, max_commits=1)
