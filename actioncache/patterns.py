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

"""Cached action pattern entity."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Pattern, Sequence, Tuple

INITIAL_CONFIDENCE = 0.85


@dataclass
class CachedPattern:
    """
    A replayable action sequence remembered for a page and task keywords.

    Attributes:
        id: Unique id, ``"{cache_key}_{created_at_millis}"``
        label: Human-readable pattern name, used to report outcomes
        page_matcher: Regex built from the originating page (metadata only)
        task_keywords: Lowercase tokens from the task that produced the pattern
        actions: Opaque action records, replayed verbatim on a hit
        last_used: Clock time of the last hit or confidence update
        created_at: Clock time of creation
        success_count: Successful executions (creation counts as one)
        failure_count: Failed executions
        confidence: Reuse confidence in [0, 1]
    """
    id: str
    label: str
    page_matcher: Pattern[str]
    task_keywords: Tuple[str, ...]
    actions: Tuple[Dict[str, Any], ...]
    last_used: float
    created_at: float
    success_count: int = 1
    failure_count: int = 0
    confidence: float = INITIAL_CONFIDENCE

    @property
    def total_attempts(self) -> int:
        return self.success_count + self.failure_count

    @property
    def success_rate(self) -> float:
        total = self.total_attempts
        return self.success_count / total if total > 0 else 0.0

    def age_seconds(self, now: float) -> float:
        """Seconds since the pattern was last used."""
        return now - self.last_used

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Check if the pattern was used within the TTL."""
        return self.age_seconds(now) < ttl_seconds

    def matches_task(self, task_lower: str) -> bool:
        """True if any keyword occurs in the (already lower-cased) task text."""
        return any(keyword in task_lower for keyword in self.task_keywords)

    def matches_page(self, page_identifier: str) -> bool:
        """Evaluate the page matcher. Lookup does not call this."""
        return self.page_matcher.search(str(page_identifier)) is not None

    def is_eligible(
        self,
        task_lower: str,
        now: float,
        confidence_threshold: float,
        ttl_seconds: float,
    ) -> bool:
        """Keyword overlap, confidence strictly above threshold, and within TTL."""
        return (
            self.matches_task(task_lower)
            and self.confidence > confidence_threshold
            and self.is_fresh(now, ttl_seconds)
        )

    @staticmethod
    def copy_actions(actions: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Deep copy of an action sequence, detached from the caller's objects."""
        return copy.deepcopy(list(actions))

    def replay_actions(self) -> List[Dict[str, Any]]:
        """Copy of the actions that callers may freely mutate."""
        return self.copy_actions(self.actions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for JSON serialization."""
        return {
            "id": self.id,
            "label": self.label,
            "page_matcher": self.page_matcher.pattern,
            "task_keywords": list(self.task_keywords),
            "actions": self.replay_actions(),
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "last_used": self.last_used,
            "created_at": self.created_at,
            "confidence": round(self.confidence, 4),
        }
