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
Configuration for the action-pattern cache.

Settings are read from ``ACTIONCACHE_*`` environment variables, from a
YAML file, or passed programmatically. Values are validated on
construction, so an out-of-range threshold fails fast instead of
silently disabling the cache.

Example:
    >>> from actioncache.config import CacheConfig
    >>> config = CacheConfig()  # Loads from environment
    >>> config.max_cache_size
    100

Environment:
    ACTIONCACHE_MAX_CACHE_SIZE=200
    ACTIONCACHE_CONFIDENCE_THRESHOLD=0.9
    ACTIONCACHE_TTL_SECONDS=600
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

from actioncache.exceptions import ConfigurationError


class CacheConfig(BaseSettings):
    """Action-pattern cache settings.

    Attributes:
        max_cache_size: Maximum patterns kept per cache key
        confidence_threshold: A pattern must be strictly above this to be reused
        ttl_seconds: Patterns unused for this long are not reused
        initial_confidence: Confidence assigned to newly stored patterns
        decay_seconds: Time constant of the staleness decay
        key_max_length: Maximum cache key length
        pattern_path_length: Path prefix length kept in page matchers
        max_keywords: Maximum task keywords kept per pattern
    """

    max_cache_size: int = Field(default=100, ge=1, description="Max patterns per key")
    confidence_threshold: float = Field(default=0.85, ge=0.0, le=1.0, description="Reuse threshold")
    ttl_seconds: float = Field(default=300.0, gt=0.0, description="Time-to-live since last use")
    initial_confidence: float = Field(default=0.85, ge=0.0, le=1.0, description="Confidence of new patterns")
    decay_seconds: float = Field(default=86400.0, gt=0.0, description="Confidence decay time constant")
    key_max_length: int = Field(default=100, ge=1, description="Max cache key length")
    pattern_path_length: int = Field(default=50, ge=1, description="Path prefix kept in page matchers")
    max_keywords: int = Field(default=5, ge=1, description="Max keywords per pattern")

    model_config = {
        "env_prefix": "ACTIONCACHE_",
        "case_sensitive": False,
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        """Create config from a dictionary. Unknown keys are rejected."""
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "CacheConfig":
        """
        Load configuration from a YAML file.

        The settings may sit at the top level or under a ``cache:`` section.

        Example YAML:
            cache:
              max_cache_size: 50
              ttl_seconds: 120

        Raises:
            ConfigurationError: If the file is missing or not a mapping
        """
        path = Path(yaml_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {yaml_path}", path=str(path))

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping, got {type(data).__name__}",
                path=str(path),
            )

        section = data.get("cache", data)
        if not isinstance(section, dict):
            raise ConfigurationError("'cache' section must be a mapping", path=str(path))

        return cls.from_dict(section)

    def save_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to a YAML file under a ``cache:`` section."""
        with open(yaml_path, "w") as f:
            yaml.safe_dump({"cache": self.to_dict()}, f, default_flow_style=False, sort_keys=False)
