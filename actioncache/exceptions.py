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

"""Exceptions raised by the action-pattern cache.

Cache operations themselves never raise on bad input (malformed URLs,
empty tasks and unknown labels all degrade to misses or no-ops). Only
configuration problems surface as exceptions.
"""


class ActionCacheError(Exception):
    """Base exception for actioncache."""


class ConfigurationError(ActionCacheError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
