"""
CLI Configuration

Configuration management for the CBMT CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.config.runtime import HashConfig, ProofConfig, RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "CBMT_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Hashing
    hash_algorithm: str = "blake2b"
    hash_personalization: str = "ckb-default-hash"

    # Verification
    parity_mode: str = "fixed"

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime_config(self) -> RuntimeConfig:
        """Build the library-level RuntimeConfig from CLI settings."""
        return RuntimeConfig(
            hash=HashConfig(
                algorithm=self.hash_algorithm,
                personalization=self.hash_personalization,
            ),
            proof=ProofConfig(parity_mode=self.parity_mode),
            log_level=self.log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        """Same layout as the JSON config file."""
        return {
            "hash": {
                "algorithm": self.hash_algorithm,
                "personalization": self.hash_personalization,
            },
            "proof": {"parity_mode": self.parity_mode},
            "log_level": self.log_level,
            "log_file": self.log_file,
            "output_format": self.default_output_format,
        }



def _env(name: str) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}")


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Overlay CBMT_* environment variables onto config in place."""
    if _env("HASH_ALGORITHM"):
        config.hash_algorithm = _env("HASH_ALGORITHM").lower()
    # An empty personalization is meaningful, so only unset means "keep"
    if _env("HASH_PERSONALIZATION") is not None:
        config.hash_personalization = _env("HASH_PERSONALIZATION")
    if _env("PARITY_MODE"):
        config.parity_mode = _env("PARITY_MODE").lower()
    if _env("LOG_LEVEL"):
        config.log_level = _env("LOG_LEVEL")
    if _env("LOG_FILE"):
        config.log_file = _env("LOG_FILE")
    if _env("OUTPUT_FORMAT"):
        config.default_output_format = _env("OUTPUT_FORMAT").lower()
    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file laid out like CLIConfig.to_dict()."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    defaults = CLIConfig()
    hash_data = data.get("hash", {})
    proof_data = data.get("proof", {})

    return CLIConfig(
        hash_algorithm=hash_data.get("algorithm", defaults.hash_algorithm),
        hash_personalization=hash_data.get("personalization", defaults.hash_personalization),
        parity_mode=proof_data.get("parity_mode", defaults.parity_mode),
        log_level=data.get("log_level", defaults.log_level),
        log_file=data.get("log_file", defaults.log_file),
        default_output_format=data.get("output_format", defaults.default_output_format),
    )


def find_config_file() -> Path | None:
    """First existing file among ./cbmt.json, ./.cbmt.json, ~/.config/cbmt/config.json."""
    for candidate in (
        Path.cwd() / "cbmt.json",
        Path.cwd() / ".cbmt.json",
        Path.home() / ".config" / "cbmt" / "config.json",
    ):
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Explicit config file; otherwise the default locations are searched

    Returns:
        Merged configuration
    """
    path = config_path if config_path is not None else find_config_file()
    config = load_config_from_file(path) if path is not None else CLIConfig()
    return apply_env_overrides(config)


def get_default_config_template() -> str:
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
