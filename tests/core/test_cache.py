"""Tests for the Yahoo Finance price cache."""

from unittest.mock import Mock, patch

from redis.exceptions import ConnectionError, TimeoutError

from moneycookie.core.cache import (
    CACHE_EXPIRATION,
    configure_price_cache,
    get_cache_stats,
    get_redis_connection,
)


class TestRedisConnection:
    """Tests for Redis connection management."""

    @patch("moneycookie.core.cache.Redis")
    def test_connection_success(self, mock_redis):
        """Test that a reachable Redis is returned after a ping."""
        mock_client = Mock()
        mock_redis.from_url.return_value = mock_client

        assert get_redis_connection() is mock_client
        mock_client.ping.assert_called_once()

    @patch("moneycookie.core.cache.Redis")
    def test_connection_refused(self, mock_redis):
        """Test that an unreachable Redis disables caching."""
        mock_redis.from_url.side_effect = ConnectionError("Connection refused")

        assert get_redis_connection() is None

    @patch("moneycookie.core.cache.Redis")
    def test_ping_timeout(self, mock_redis):
        """Test that a Redis that does not answer disables caching."""
        mock_redis.from_url.return_value.ping.side_effect = TimeoutError("timed out")

        assert get_redis_connection() is None


class TestConfigurePriceCache:
    """Tests for installing the requests-cache backend."""

    @patch("moneycookie.core.cache.RedisCache")
    @patch("moneycookie.core.cache.get_redis_connection")
    @patch("moneycookie.core.cache.requests_cache.install_cache")
    def test_installs_cache(self, mock_install, mock_redis_conn, mock_backend):
        """Test that the cache is installed with daily price expiry."""
        mock_redis_conn.return_value = Mock()

        assert configure_price_cache() is True

        mock_backend.assert_called_once_with(
            namespace="moneycookie-prices", connection=mock_redis_conn.return_value
        )
        kwargs = mock_install.call_args.kwargs
        assert kwargs["backend"] is mock_backend.return_value
        assert kwargs["expire_after"] == CACHE_EXPIRATION["default"]
        assert CACHE_EXPIRATION["daily_data"] in kwargs["urls_expire_after"].values()
        assert kwargs["stale_if_error"] is True

    @patch("moneycookie.core.cache.get_redis_connection")
    @patch("moneycookie.core.cache.requests_cache.install_cache")
    def test_skips_without_redis(self, mock_install, mock_redis_conn):
        """Test that price sync keeps working uncached when Redis is down."""
        mock_redis_conn.return_value = None

        assert configure_price_cache() is False
        mock_install.assert_not_called()


class TestCacheStats:
    """Tests for cache statistics."""

    @patch("moneycookie.core.cache.requests_cache.get_cache")
    def test_disabled(self, mock_get_cache):
        """Test stats when no cache is installed."""
        mock_get_cache.return_value = None

        assert get_cache_stats() == {"enabled": False}

    @patch("moneycookie.core.cache.requests_cache.get_cache")
    def test_enabled(self, mock_get_cache):
        """Test stats for an installed cache."""
        mock_get_cache.return_value.responses = {"a": 1, "b": 2}

        stats = get_cache_stats()

        assert stats["enabled"] is True
        assert stats["size"] == 2
