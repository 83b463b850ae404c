"""
Integration tests.

These run against a real Redis server (REDIS_TEST_URL, default
redis://localhost:6379/15) and are skipped when none is reachable.
"""
