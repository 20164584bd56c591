import pytest

from src.services.news.cache import NewsCache, preference_key, DEFAULT_PREFERENCE_KEY


class TestPreferenceKey:
    def test_order_independent(self):
        assert preference_key(["b", "a"]) == preference_key(["a", "b"]) == "a,b"

    def test_empty_preferences_use_default_key(self):
        assert preference_key([]) == DEFAULT_PREFERENCE_KEY
        assert preference_key(None) == DEFAULT_PREFERENCE_KEY

    def test_single_blank_tag_falls_back_to_default(self):
        assert preference_key([""]) == DEFAULT_PREFERENCE_KEY

    def test_does_not_mutate_input(self):
        preferences = ["movies", "comics"]
        preference_key(preferences)
        assert preferences == ["movies", "comics"]


class TestNewsCache:
    def test_get_missing_key(self, news_cache):
        assert news_cache.get("a") is None
        assert news_cache.stats["misses"] == 1

    def test_put_then_get(self, news_cache, fake_clock, sample_articles):
        news_cache.put("a", sample_articles)

        entry = news_cache.get("a")
        assert entry.articles == sample_articles
        assert entry.fetched_at == fake_clock.now
        assert news_cache.stats["hits"] == 1

    def test_put_copies_articles(self, news_cache, sample_articles):
        news_cache.put("a", sample_articles)
        sample_articles.append({"title": "late addition"})

        assert len(news_cache.get("a").articles) == 2

    def test_put_overwrites_existing_entry(self, news_cache, fake_clock, sample_articles):
        news_cache.put("a", sample_articles)
        fake_clock.advance(60)
        news_cache.put("a", [{"title": "Replacement"}])

        entry = news_cache.get("a")
        assert entry.articles == [{"title": "Replacement"}]
        assert entry.fetched_at == fake_clock.now
        assert len(news_cache) == 1

    def test_freshness_window(self, news_cache, fake_clock):
        entry = news_cache.put("a", [])

        fake_clock.advance(299)
        assert news_cache.is_fresh(entry)

        fake_clock.advance(1)
        assert not news_cache.is_fresh(entry)

    def test_stale_entries_are_kept(self, news_cache, fake_clock):
        news_cache.put("a", [{"title": "Old"}])
        fake_clock.advance(3600)

        assert "a" in news_cache
        assert news_cache.get("a").articles == [{"title": "Old"}]

    def test_unbounded_by_default(self, news_cache):
        for i in range(100):
            news_cache.put(f"key-{i}", [])

        assert len(news_cache) == 100
        assert news_cache.stats["evictions"] == 0

    def test_max_entries_evicts_least_recently_used(self, fake_clock):
        cache = NewsCache(max_entries=2, clock=fake_clock)
        cache.put("a", [])
        cache.put("b", [])
        cache.get("a")
        cache.put("c", [])

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert cache.stats["evictions"] == 1

    def test_rejects_non_positive_bound(self):
        with pytest.raises(ValueError):
            NewsCache(max_entries=0)

    def test_clear(self, news_cache):
        news_cache.put("a", [])
        news_cache.clear()
        assert len(news_cache) == 0

    def test_get_stats(self, news_cache):
        news_cache.put("a", [])
        news_cache.get("a")

        stats = news_cache.get_stats()
        assert stats["entries"] == 1
        assert stats["hits"] == 1
        assert stats["ttl_seconds"] == 300
        assert stats["max_entries"] is None
