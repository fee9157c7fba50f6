"""
Runtime Configuration

Central configuration for the hash primitive, proof verification mode,
and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.crypto.hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_PERSONALIZATION,
    SUPPORTED_ALGORITHMS,
)
from core.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "CBMT_"

# Mirrors core.merkle.merkle_tree.PARITY_MODES; core.merkle imports this module.
_PARITY_MODES = ("fixed", "tracking")


@dataclass
class HashConfig:
    """Configuration for the digest primitive."""
    algorithm: str = DEFAULT_ALGORITHM
    personalization: str = DEFAULT_PERSONALIZATION.decode("ascii")

    def __post_init__(self):
        self.algorithm = self.algorithm.lower()
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigException(
                f"Unsupported hash algorithm: {self.algorithm!r}",
                details={"allowed": list(SUPPORTED_ALGORITHMS)},
            )
        if len(self.personalization_bytes) > 16:
            raise ConfigException(
                "Hash personalization must be at most 16 bytes",
                details={"personalization": self.personalization},
            )

    @property
    def personalization_bytes(self) -> bytes:
        return self.personalization.encode("utf-8")


@dataclass
class ProofConfig:
    """Configuration for proof verification."""
    # "fixed" reproduces deployed verifiers; "tracking" follows the parent
    # position while climbing.
    parity_mode: str = "fixed"

    def __post_init__(self):
        if self.parity_mode not in _PARITY_MODES:
            raise ConfigException(
                f"Unknown parity mode {self.parity_mode!r}",
                details={"allowed": list(_PARITY_MODES)},
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    proof: ProofConfig = field(default_factory=ProofConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CBMT_HASH_ALGORITHM: "blake2b" or "sha256"
        - CBMT_HASH_PERSONALIZATION: BLAKE2b personalization string
        - CBMT_PARITY_MODE: "fixed" or "tracking"
        - CBMT_LOG_LEVEL: Log level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}HASH_PERSONALIZATION") is not None:
            overrides.setdefault("hash", {})["personalization"] = os.getenv(
                f"{ENV_PREFIX}HASH_PERSONALIZATION"
            )

        if os.getenv(f"{ENV_PREFIX}PARITY_MODE"):
            overrides.setdefault("proof", {})["parity_mode"] = os.getenv(
                f"{ENV_PREFIX}PARITY_MODE", "fixed"
            ).lower()

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

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
        hash_data = data.get("hash", {})
        proof_data = data.get("proof", {})

        try:
            hash_config = HashConfig(**hash_data) if hash_data else HashConfig()
            proof_config = ProofConfig(**proof_data) if proof_data else ProofConfig()
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            hash=hash_config,
            proof=proof_config,
            log_level=data.get("log_level", "INFO"),
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

        if "hash" in overrides:
            merged = {
                "algorithm": new_config.hash.algorithm,
                "personalization": new_config.hash.personalization,
                **overrides["hash"],
            }
            new_config.hash = HashConfig(**merged)

        if "proof" in overrides:
            new_config.proof = ProofConfig(**overrides["proof"])

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "algorithm": self.hash.algorithm,
                "personalization": self.hash.personalization,
            },
            "proof": {
                "parity_mode": self.proof.parity_mode,
            },
            "log_level": self.log_level,
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
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
