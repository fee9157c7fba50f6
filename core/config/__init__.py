"""
Runtime Configuration Module

Provides configuration loading for hashing and proof verification.
"""

from .runtime import (
    ENV_PREFIX,
    HashConfig,
    ProofConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "HashConfig",
    "ProofConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
