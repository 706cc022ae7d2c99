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
actioncache - Adaptive action-pattern cache for LLM browser agents.

Remembers which action sequences satisfied a task on a page and replays
them instead of calling the model again, while confidence stays high and
the pattern is fresh.
"""

__version__ = "26.02.01"
__author__ = "Firefly Software Solutions Inc"
__license__ = "Apache-2.0"

from actioncache.cache import ActionPatternCache
from actioncache.config import CacheConfig
from actioncache.confidence import compute_confidence
from actioncache.exceptions import ActionCacheError, ConfigurationError
from actioncache.keys import derive_cache_key, extract_keywords
from actioncache.patterns import CachedPattern
from actioncache.resolver import ActionResolver, Resolution
from actioncache.stats import CacheStats
from actioncache.utils.clock import Clock, ManualClock, SystemClock

__all__ = [
    # Cache
    "ActionPatternCache",
    "CachedPattern",
    "CacheStats",
    "compute_confidence",
    "derive_cache_key",
    "extract_keywords",
    # Agent integration
    "ActionResolver",
    "Resolution",
    # Configuration
    "CacheConfig",
    # Errors
    "ActionCacheError",
    "ConfigurationError",
    # Time
    "Clock",
    "ManualClock",
    "SystemClock",
]
