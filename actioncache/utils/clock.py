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
Time sources for the action-pattern cache.

TTL checks and confidence decay both depend on wall-clock time. The cache
reads time through a small ``Clock`` interface so that callers (and tests)
can inject a controllable source instead of patching ``time.time``.

Example:
    >>> clock = ManualClock(start=1000.0)
    >>> cache = ActionPatternCache(clock=clock)
    >>> clock.advance(301)  # step past the default 5 minute TTL
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current time in seconds."""

    def now(self) -> float:
        ...


class SystemClock:
    """Clock backed by ``time.time()``."""

    def now(self) -> float:
        return time.time()


class ManualClock:
    """
    Clock that only moves when told to.

    Attributes:
        current: Current time in seconds
    """

    def __init__(self, start: float = 0.0) -> None:
        self.current = float(start)

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> float:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise ValueError(f"Cannot move clock backwards by {seconds}s")
        self.current += seconds
        return self.current

    def set(self, timestamp: float) -> None:
        """Jump to an absolute timestamp."""
        self.current = float(timestamp)
