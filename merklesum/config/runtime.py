"""
Runtime Configuration

Central configuration for tree construction and logging.

Hash function, domain prefixes and the integer encoding width are part
of the commitment format and are intentionally not configurable here.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class BuildConfig:
    """
    Configuration for tree construction.

    Parallel mode dispatches leaf hashing and each level's node hashing to a
    ThreadPoolExecutor and writes results back by index, so the node list is
    identical to a sequential build. It does not make CPython builds faster:
    hashlib only releases the GIL for inputs over 2047 bytes, and leaf and
    node preimages are 65 and 97 bytes, so the threads take turns. Leave it
    off unless the hash function is swapped for one that runs outside the GIL.
    """
    parallel: bool = False
    max_workers: Optional[int] = None
    # Builds smaller than this always run sequentially
    parallel_threshold: int = 1024

    def __post_init__(self):
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.parallel_threshold < 1:
            raise ValueError(
                f"parallel_threshold must be positive, got {self.parallel_threshold}"
            )

    def use_parallel(self, num_leaves: int) -> bool:
        """Whether a build over num_leaves should dispatch work to a thread pool."""
        return self.parallel and num_leaves >= self.parallel_threshold


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    build: BuildConfig = field(default_factory=BuildConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLESUM_PARALLEL: Enable parallel construction (true/false)
        - MERKLESUM_MAX_WORKERS: Thread pool size for parallel construction
        - MERKLESUM_PARALLEL_THRESHOLD: Minimum leaf count for parallel construction
        - MERKLESUM_LOG_LEVEL: Log level name
        - MERKLESUM_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        # Build settings
        if os.getenv("MERKLESUM_PARALLEL"):
            overrides.setdefault("build", {})["parallel"] = _env_flag("MERKLESUM_PARALLEL")
        if os.getenv("MERKLESUM_MAX_WORKERS"):
            overrides.setdefault("build", {})["max_workers"] = int(
                os.environ["MERKLESUM_MAX_WORKERS"]
            )
        if os.getenv("MERKLESUM_PARALLEL_THRESHOLD"):
            overrides.setdefault("build", {})["parallel_threshold"] = int(
                os.environ["MERKLESUM_PARALLEL_THRESHOLD"]
            )

        # Logging settings
        if os.getenv("MERKLESUM_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.environ["MERKLESUM_LOG_LEVEL"]
        if os.getenv("MERKLESUM_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.environ["MERKLESUM_LOG_FILE"]

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        build_data = data.get("build", {})
        logging_data = data.get("logging", {})

        build = BuildConfig(**build_data) if build_data else BuildConfig()
        logging_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            build=build,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "build" in overrides:
            for key, value in overrides["build"].items():
                setattr(new_config.build, key, value)
            # Re-run validation on the merged values
            new_config.build.__post_init__()

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "build": {
                "parallel": self.build.parallel,
                "max_workers": self.build.max_workers,
                "parallel_threshold": self.build.parallel_threshold,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env-derived defaults)."""
    global _default_config
    _default_config = config
