"""
Configuration Unit Tests
Tests for core/config/runtime.py and cbmt_cli/config.py
"""
import json

import pytest

from cbmt_cli.config import CLIConfig, load_config, load_config_from_file
from core.config.runtime import (
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from core.schemas.errors import ConfigException


class TestRuntimeConfigDefaults:

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hash.algorithm == "blake2b"
        assert config.hash.personalization_bytes == b"ckb-default-hash"
        assert config.proof.parity_mode == "fixed"
        assert config.log_level == "INFO"

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({"proof": {"parity_mode": "tracking"}})
        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestRuntimeConfigValidation:

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigException):
            RuntimeConfig.from_dict({"hash": {"algorithm": "md5"}})

    def test_algorithm_is_case_insensitive(self):
        config = RuntimeConfig.from_dict({"hash": {"algorithm": "SHA256"}})
        assert config.hash.algorithm == "sha256"

    def test_personalization_too_long(self):
        with pytest.raises(ConfigException):
            RuntimeConfig.from_dict({"hash": {"personalization": "x" * 17}})

    def test_unknown_parity_mode(self):
        with pytest.raises(ConfigException):
            RuntimeConfig.from_dict({"proof": {"parity_mode": "sometimes"}})

    def test_unknown_field(self):
        with pytest.raises(ConfigException, match="Invalid configuration"):
            RuntimeConfig.from_dict({"hash": {"colour": "blue"}})


class TestEnvironmentOverrides:
    """Environment variables override file and default values."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CBMT_HASH_ALGORITHM", "sha256")
        monkeypatch.setenv("CBMT_PARITY_MODE", "TRACKING")
        monkeypatch.setenv("CBMT_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hash.algorithm == "sha256"
        assert config.proof.parity_mode == "tracking"
        assert config.log_level == "DEBUG"

    def test_with_env_overrides_keeps_unset_fields(self, monkeypatch):
        base = RuntimeConfig.from_dict({"hash": {"personalization": "custom"}})
        monkeypatch.setenv("CBMT_HASH_ALGORITHM", "blake2b")

        config = base.with_env_overrides()

        assert config.hash.personalization == "custom"
        assert base is not config

    def test_no_overrides_returns_same_object(self):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base

    def test_default_config_reads_env(self, monkeypatch):
        monkeypatch.setenv("CBMT_PARITY_MODE", "tracking")
        set_default_config(None)

        assert get_default_config().proof.parity_mode == "tracking"


class TestYamlConfig:

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "cbmt.yaml"
        path.write_text(
            "hash:\n"
            "  algorithm: sha256\n"
            "proof:\n"
            "  parity_mode: tracking\n"
            "log_level: WARNING\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hash.algorithm == "sha256"
        assert config.proof.parity_mode == "tracking"
        assert config.log_level == "WARNING"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")


class TestCLIConfig:

    def test_defaults(self):
        config = load_config()

        assert config == CLIConfig()
        assert config.log_level == "WARNING"

    def test_file_in_cwd_is_found(self, tmp_path):
        (tmp_path / "cbmt.json").write_text(json.dumps({"proof": {"parity_mode": "tracking"}}))

        assert load_config().parity_mode == "tracking"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"hash": {"algorithm": "sha256"}, "output_format": "json"}))
        monkeypatch.setenv("CBMT_HASH_ALGORITHM", "blake2b")

        config = load_config(path)

        assert config.hash_algorithm == "blake2b"
        assert config.default_output_format == "json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "nope.json")

    def test_to_runtime_config(self):
        config = CLIConfig(hash_algorithm="sha256", parity_mode="tracking")
        runtime = config.to_runtime_config()

        assert runtime.hash.algorithm == "sha256"
        assert runtime.proof.parity_mode == "tracking"
