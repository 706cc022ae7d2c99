# Copyright 2026 Firefly Software Solutions Inc
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Action Pattern Cache - reuse of previously successful action sequences.

Every agent decision normally costs an LLM call. When the agent has
already solved a similar task on the same page, the action sequence it
produced can be replayed instead. This module remembers those sequences
and decides when replay is safe.

Key Features:
- Cache keys from host + path, so query strings and fragments share patterns
- Keyword-substring task matching, tolerant to rephrased tasks
- Confidence from success/failure feedback, decayed by idle time
- TTL since last use, checked at lookup time
- Bounded per-key lists with lowest-confidence eviction
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from actioncache.config import CacheConfig
from actioncache.confidence import apply_outcome
from actioncache.eviction import evict_lowest_confidence
from actioncache.keys import compile_page_matcher, derive_cache_key, keywords_or_placeholder
from actioncache.patterns import CachedPattern
from actioncache.stats import compute_stats
from actioncache.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


class ActionPatternCache:
    """
    In-memory store of replayable action patterns.

    One instance is owned by an agent session and passed to whatever needs
    it; there is no module-level instance. All public methods hold an
    internal lock, so a single instance may be shared by several sessions.

    Usage:
        cache = ActionPatternCache()

        actions = cache.lookup(url, task)
        if actions is None:
            actions = await generate_with_llm(url, task)
            pattern = cache.store(url, task, actions)

        # ... execute actions ...
        cache.update_confidence(url, pattern.label, success=True)
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            config: Cache settings (defaults to ``CacheConfig()``, read from environment)
            clock: Time source (defaults to wall-clock time)
        """
        self.config = config or CacheConfig()
        self.clock = clock or SystemClock()

        # cache_key -> patterns, in insertion order until an eviction sorts them
        self._patterns: Dict[str, List[CachedPattern]] = {}
        self._lock = threading.RLock()

        logger.info(
            f"[ActionCache] Initialized: max_size={self.config.max_cache_size}, "
            f"threshold={self.config.confidence_threshold}, "
            f"ttl={self.config.ttl_seconds}s"
        )

    def cache_key(self, page_identifier: str) -> str:
        """Cache key for a page identifier."""
        return derive_cache_key(page_identifier, self.config.key_max_length)

    # ==================== Lookup ====================

    def lookup_pattern(self, page_identifier: str, task: str) -> Optional[CachedPattern]:
        """
        Find the first reusable pattern for this page and task.

        A pattern is reusable when one of its keywords occurs in the task,
        its confidence is above the threshold and it was used within the
        TTL. Patterns are scanned in list order. A hit refreshes
        ``last_used``.

        Args:
            page_identifier: Current page URL
            task: Task description

        Returns:
            The matching CachedPattern, or None on a miss
        """
        with self._lock:
            key = self.cache_key(page_identifier)
            patterns = self._patterns.get(key)
            if not patterns:
                return None

            task_lower = str(task or "").lower()
            now = self.clock.now()

            for pattern in patterns:
                if pattern.is_eligible(
                    task_lower,
                    now,
                    self.config.confidence_threshold,
                    self.config.ttl_seconds,
                ):
                    pattern.last_used = now
                    logger.debug(
                        f"[ActionCache] Cache hit for pattern: {pattern.label}, "
                        f"confidence={pattern.confidence:.2f}"
                    )
                    return pattern

            logger.debug(f"[ActionCache] No reusable pattern among {len(patterns)} for {key}")
            return None

    def lookup(self, page_identifier: str, task: str) -> Optional[List[Dict[str, Any]]]:
        """
        Get cached actions for this page and task.

        Returns:
            A copy of the pattern's actions, or None on a miss
        """
        pattern = self.lookup_pattern(page_identifier, task)
        if pattern is None:
            return None
        return pattern.replay_actions()

    # ==================== Storage ====================

    def store(
        self,
        page_identifier: str,
        task: str,
        actions: Sequence[Dict[str, Any]],
        label: Optional[str] = None,
    ) -> CachedPattern:
        """
        Remember a successful action sequence.

        Every call appends a new, independent pattern; nothing is
        overwritten. If the key's list grows past ``max_cache_size`` the
        lowest-confidence pattern is evicted.

        Args:
            page_identifier: Page the actions were executed on
            task: Task description the actions satisfied
            actions: Action records to replay later
            label: Pattern name (defaults to ``pattern_<first keyword>``)

        Returns:
            The stored CachedPattern
        """
        with self._lock:
            key = self.cache_key(page_identifier)
            keywords = keywords_or_placeholder(task, max_keywords=self.config.max_keywords)
            now = self.clock.now()
            patterns = self._patterns.setdefault(key, [])

            pattern = CachedPattern(
                id=self._new_pattern_id(key, now, patterns),
                label=label or f"pattern_{keywords[0]}",
                page_matcher=compile_page_matcher(page_identifier, self.config.pattern_path_length),
                task_keywords=tuple(keywords),
                actions=tuple(CachedPattern.copy_actions(actions)),
                last_used=now,
                created_at=now,
                confidence=self.config.initial_confidence,
            )
            patterns.append(pattern)

            for evicted in evict_lowest_confidence(patterns, self.config.max_cache_size):
                logger.debug(
                    f"[ActionCache] Evicted pattern {evicted.label} "
                    f"(confidence={evicted.confidence:.2f}) from {key}"
                )

            logger.debug(f"[ActionCache] Cached pattern: {pattern.label} for {page_identifier}")
            return pattern

    @staticmethod
    def _new_pattern_id(key: str, now: float, patterns: List[CachedPattern]) -> str:
        base = f"{key}_{int(now * 1000)}"
        existing = {p.id for p in patterns}
        pattern_id = base
        suffix = 1
        while pattern_id in existing:
            pattern_id = f"{base}_{suffix}"
            suffix += 1
        return pattern_id

    # ==================== Feedback ====================

    def update_confidence(self, page_identifier: str, label: str, success: bool) -> Optional[float]:
        """
        Report the outcome of executing a pattern's actions.

        Unknown pages or labels are ignored.

        Args:
            page_identifier: Page the actions ran on
            label: Pattern label
            success: Whether execution achieved the task

        Returns:
            The new confidence, or None if no pattern matched
        """
        with self._lock:
            key = self.cache_key(page_identifier)
            pattern = next(
                (p for p in self._patterns.get(key, []) if p.label == label),
                None,
            )
            if pattern is None:
                return None

            confidence = apply_outcome(
                pattern,
                success,
                self.clock.now(),
                decay_seconds=self.config.decay_seconds,
            )
            logger.debug(f"[ActionCache] Updated confidence for {label}: {confidence:.2f}")
            return confidence

    # ==================== Invalidation ====================

    def clear_key(self, page_identifier: str) -> int:
        """
        Drop all patterns for a page, e.g. after navigating away.

        Returns:
            Number of patterns removed
        """
        with self._lock:
            key = self.cache_key(page_identifier)
            removed = self._patterns.pop(key, [])
            if removed:
                logger.debug(f"[ActionCache] Cleared {len(removed)} patterns for {key}")
            return len(removed)

    def clear_all(self) -> None:
        """Drop every pattern."""
        with self._lock:
            self._patterns.clear()
        logger.info("[ActionCache] All patterns cleared")

    # ==================== Inspection ====================

    def get_patterns(self, page_identifier: str) -> List[CachedPattern]:
        """Patterns currently stored for a page, in match order."""
        with self._lock:
            return list(self._patterns.get(self.cache_key(page_identifier), []))

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return compute_stats(self._patterns).to_dict()

    def log_stats(self) -> None:
        """Log cache statistics."""
        stats = self.get_stats()
        logger.info(
            f"[ActionCache] Stats: "
            f"patterns={stats['total_patterns']}, "
            f"keys={stats['cache_size']}, "
            f"hits={stats['total_hits']}, "
            f"hit_rate={stats['estimated_hit_rate']:.2f}"
        )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(p) for p in self._patterns.values())

    def __contains__(self, page_identifier: object) -> bool:
        with self._lock:
            return self.cache_key(str(page_identifier)) in self._patterns
