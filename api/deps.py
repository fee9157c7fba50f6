"""
API Dependencies

Factories for the configured root builder and proof verifier.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from core.config.runtime import RuntimeConfig
from core.merkle import ProofVerifier, RootBuilder
from core.merkle.merkle_tree import ParityMode
from core.schemas.errors import ConfigException

logger = logging.getLogger(__name__)


def _config_search_paths() -> list[Path]:
    return [
        Path.cwd() / "cbmt.json",
        Path.cwd() / ".cbmt.json",
        Path.home() / ".config" / "cbmt" / "config.json",
    ]


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./cbmt.json
      2. ./.cbmt.json
      3. ~/.config/cbmt/config.json

    Environment variables ALWAYS override config file values.

    Raises:
        ConfigException: If the first config file found cannot be used
    """
    config = RuntimeConfig()

    for path in _config_search_paths():
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigException(
                    f"Failed to parse {path}: {e}", details={"path": str(path)}
                ) from e
            if not isinstance(data, dict):
                raise ConfigException(
                    f"Config file {path} must hold a JSON object",
                    details={"path": str(path)},
                )
            config = RuntimeConfig.from_dict(data)
            logger.info(f"Loaded config from {path}")
            break

    return config.with_env_overrides()


def get_root_builder() -> RootBuilder:
    """Create a RootBuilder bound to the server configuration."""
    return RootBuilder.from_config(load_runtime_config())


def get_proof_verifier(parity_mode: Optional[ParityMode] = None) -> ProofVerifier:
    """
    Create a ProofVerifier bound to the server configuration.

    Args:
        parity_mode: Per-request override; None uses the configured mode
    """
    return ProofVerifier(parity_mode=parity_mode, config=load_runtime_config())
