# Copyright 2026 Firefly Software Solutions Inc
# SPDX-License-Identifier: Apache-2.0

"""
Shared test fixtures for the actioncache test suite.

This module provides common fixtures used across all test categories:
- A manually driven clock
- Cache instances with default and small size bounds
- A mock action generator standing in for the LLM
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

import pytest

from actioncache.cache import ActionPatternCache
from actioncache.config import CacheConfig
from actioncache.utils.clock import ManualClock


CLICK_GITHUB = {"action": "click", "selector": "a[href*='github.com']"}
OPEN_REPO = {"action": "click", "selector": "#repositories"}


# ==================== Environment Setup ====================

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ.setdefault("ACTIONCACHE_LOG_LEVEL", "warning")
    yield


# ==================== Clock ====================

@pytest.fixture
def clock() -> ManualClock:
    """Clock frozen at a fixed epoch time."""
    return ManualClock(start=1_700_000_000.0)


# ==================== Caches ====================

@pytest.fixture
def config() -> CacheConfig:
    """Default cache configuration."""
    return CacheConfig()


@pytest.fixture
def cache(config: CacheConfig, clock: ManualClock) -> ActionPatternCache:
    """Cache with default settings and a manual clock."""
    return ActionPatternCache(config=config, clock=clock)


@pytest.fixture
def small_cache(clock: ManualClock) -> ActionPatternCache:
    """Cache that keeps at most three patterns per key."""
    return ActionPatternCache(config=CacheConfig(max_cache_size=3), clock=clock)


# ==================== Mock Action Generator ====================

class MockActionGenerator:
    """Async stand-in for the LLM that plans actions."""

    def __init__(self, actions: Optional[List[Dict[str, Any]]] = None):
        self.actions = actions if actions is not None else [CLICK_GITHUB, OPEN_REPO]
        self.calls: List[Tuple[str, str]] = []
        self.error: Optional[Exception] = None

    async def __call__(self, page_identifier: str, task: str) -> List[Dict[str, Any]]:
        self.calls.append((page_identifier, task))
        if self.error is not None:
            raise self.error
        return [dict(a) for a in self.actions]


@pytest.fixture
def generator() -> MockActionGenerator:
    """Mock generator returning two click actions."""
    return MockActionGenerator()
