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
Cache-first action resolution for an agent's decision loop.

The agent asks for actions, executes them, then reports the outcome:

    resolver = ActionResolver(cache)
    resolution = await resolver.resolve(url, task, generate=llm_plan_actions)
    success = await execute(resolution.actions)
    resolver.report(resolution, success)

``generate`` is only awaited on a cache miss, and its result is stored
for later reuse. Exceptions from ``generate`` propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from actioncache.cache import ActionPatternCache

logger = logging.getLogger(__name__)

ActionGenerator = Callable[[str, str], Awaitable[List[Dict[str, Any]]]]


@dataclass
class Resolution:
    """
    Actions chosen for one decision step.

    Attributes:
        page_identifier: Page the actions apply to
        task: Task description
        actions: Actions to execute
        from_cache: True if the actions were replayed from the cache
        label: Label of the cached or newly stored pattern (None if nothing was stored)
    """
    page_identifier: str
    task: str
    actions: List[Dict[str, Any]] = field(default_factory=list)
    from_cache: bool = False
    label: Optional[str] = None


class ActionResolver:
    """Runs the lookup / generate / store sequence against one cache."""

    def __init__(self, cache: ActionPatternCache) -> None:
        self.cache = cache
        self.hits = 0
        self.misses = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    async def resolve(
        self,
        page_identifier: str,
        task: str,
        generate: ActionGenerator,
        label: Optional[str] = None,
    ) -> Resolution:
        """
        Get actions for a step, from the cache when possible.

        Args:
            page_identifier: Current page URL
            task: Task description
            generate: Async callable ``(page, task) -> actions`` used on a miss
            label: Label for a newly stored pattern

        Returns:
            Resolution describing the actions and where they came from
        """
        pattern = self.cache.lookup_pattern(page_identifier, task)
        if pattern is not None:
            self.hits += 1
            return Resolution(
                page_identifier=page_identifier,
                task=task,
                actions=pattern.replay_actions(),
                from_cache=True,
                label=pattern.label,
            )

        self.misses += 1
        actions = await generate(page_identifier, task)

        if not actions:
            logger.debug(f"[ActionResolver] Generator returned no actions for {page_identifier}")
            return Resolution(page_identifier=page_identifier, task=task)

        stored = self.cache.store(page_identifier, task, actions, label=label)
        return Resolution(
            page_identifier=page_identifier,
            task=task,
            actions=list(actions),
            from_cache=False,
            label=stored.label,
        )

    def report(self, resolution: Resolution, success: bool) -> Optional[float]:
        """
        Feed an execution outcome back into the cache.

        Returns:
            The pattern's new confidence, or None if nothing was stored for it
        """
        if resolution.label is None:
            return None
        return self.cache.update_confidence(resolution.page_identifier, resolution.label, success)
