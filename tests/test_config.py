"""Tests for assetwarden.config models and the YAML loader."""

import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from assetwarden.config.models import AssetsConfig, FingerprintConfig, WardenConfig
from assetwarden.config.loader import DEFAULT_CONFIG_TEMPLATE, load_config, _expand_env_vars
from assetwarden.integrity import IntegrityResolver


# ── WardenConfig defaults ───────────────────────────────────────────


class TestWardenConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_metadata_file(self, sample_config):
        assert sample_config.assets.metadata_file == "package.json"

    def test_default_record_file(self, sample_config):
        assert sample_config.assets.record_file == ".integrity.yml"

    def test_default_baseline(self, sample_config):
        assert sample_config.assets.baseline_version == "0.0.0"

    def test_no_default_assets_path(self, sample_config):
        assert sample_config.assets.default_assets is None


# ── Individual config model validations ─────────────────────────────


class TestAssetsConfig:
    def test_defaults(self):
        cfg = AssetsConfig()
        assert cfg.assets_dir == "lib/lambda"

    def test_blank_metadata_file_rejected(self):
        with pytest.raises(ValidationError):
            AssetsConfig(metadata_file="  ")

    @pytest.mark.parametrize("baseline", ["", "banana", "1.0", "v1.0.0"])
    def test_non_semver_baseline_rejected(self, baseline):
        with pytest.raises(ValidationError, match="not a semantic version"):
            AssetsConfig(baseline_version=baseline)

    def test_prerelease_baseline_accepted(self):
        assert AssetsConfig(baseline_version="0.0.0-untagged").baseline_version == "0.0.0-untagged"

    def test_custom_values(self):
        cfg = AssetsConfig(metadata_file="bundle.json", default_assets="/opt/tool/assets")
        assert cfg.metadata_file == "bundle.json"
        assert cfg.default_assets == "/opt/tool/assets"


class TestFingerprintConfig:
    def test_defaults(self):
        cfg = FingerprintConfig()
        assert cfg.include == ["*.js", "package.json"]
        assert cfg.exclude == [".serverless", "node_modules"]

    def test_empty_include_rejected(self):
        with pytest.raises(ValidationError):
            FingerprintConfig(include=[])

    def test_separate_list_instances(self):
        a = FingerprintConfig()
        b = FingerprintConfig()
        a.exclude.append("dist")
        assert b.exclude == [".serverless", "node_modules"]


class TestLogSettings:
    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            WardenConfig(log_level="verbose")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            WardenConfig(log_format="xml")


# ── Resolver wiring ─────────────────────────────────────────────────


class TestResolverFromConfig:
    def test_applies_asset_and_fingerprint_settings(self):
        cfg = WardenConfig(
            assets=AssetsConfig(
                metadata_file="bundle.json",
                record_file="integrity.yaml",
                assets_dir="assets",
                default_assets="/opt/tool/assets",
                baseline_version="0.1.0",
            ),
            fingerprint=FingerprintConfig(include=["*.py"], exclude=["venv"]),
        )
        resolver = IntegrityResolver.from_config(cfg)
        assert resolver.oracle.metadata_file == "bundle.json"
        assert resolver.oracle.baseline == "0.1.0"
        assert str(resolver.oracle.default_assets) == "/opt/tool/assets"
        assert resolver.record_file == "integrity.yaml"
        assert resolver.assets_dir == "assets"
        assert resolver.policy.include == ("*.py",)
        assert resolver.policy.exclude == ("venv",)


# ── _expand_env_vars ────────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self):
        with patch.dict(os.environ, {"MY_KEY": "secret123"}):
            assert _expand_env_vars("${MY_KEY}") == "secret123"

    def test_unset_var_raises(self, monkeypatch):
        monkeypatch.delenv("ASSETWARDEN_UNSET", raising=False)
        with pytest.raises(ValueError, match="ASSETWARDEN_UNSET is not set"):
            _expand_env_vars("${ASSETWARDEN_UNSET}", "assetwarden.yaml")

    def test_unset_var_uses_fallback(self, monkeypatch):
        monkeypatch.delenv("ASSETWARDEN_UNSET", raising=False)
        assert _expand_env_vars("${ASSETWARDEN_UNSET:-lib/lambda}") == "lib/lambda"

    def test_set_var_wins_over_fallback(self, monkeypatch):
        monkeypatch.setenv("ASSETWARDEN_SET", "assets")
        assert _expand_env_vars("${ASSETWARDEN_SET:-lib/lambda}") == "assets"

    def test_expands_nested_structures(self):
        with patch.dict(os.environ, {"A": "alpha", "B": "beta"}):
            result = _expand_env_vars({"outer": {"inner": "${A}"}, "list": ["${B}"]})
            assert result == {"outer": {"inner": "alpha"}, "list": ["beta"]}

    def test_non_string_passthrough(self):
        assert _expand_env_vars(42) == 42
        assert _expand_env_vars(True) is True
        assert _expand_env_vars(None) is None

    def test_mixed_text_and_var(self):
        with patch.dict(os.environ, {"TOOL_HOME": "/opt/tool"}):
            assert _expand_env_vars("${TOOL_HOME}/lib/lambda") == "/opt/tool/lib/lambda"


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def _isolate(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")

    def test_returns_defaults_when_no_file_exists(self):
        config = load_config()
        assert config == WardenConfig()

    def test_loads_valid_yaml(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text(
            "assets:\n  metadata_file: bundle.json\nlog_level: debug\n"
        )
        config = load_config()
        assert config.assets.metadata_file == "bundle.json"
        assert config.log_level == "debug"

    def test_raises_on_invalid_yaml(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("  bad:\nyaml: [unterminated")
        with pytest.raises(ValueError, match="not valid YAML"):
            load_config()

    def test_raises_on_invalid_config_values(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("log_format: xml\n")
        with pytest.raises(ValueError, match="invalid settings"):
            load_config()

    def test_raises_on_non_mapping(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="top level must be a mapping"):
            load_config()

    def test_cli_path_takes_priority(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("log_level: debug\n")
        cli_file = tmp_path / "custom.yaml"
        cli_file.write_text("log_level: error\n")
        assert load_config(cli_path=str(cli_file)).log_level == "error"

    def test_missing_cli_path_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_config(cli_path=str(tmp_path / "nope.yaml"))

    def test_user_global_config_used_as_fallback(self, tmp_path):
        user_dir = tmp_path / "fakehome" / ".assetwarden"
        user_dir.mkdir(parents=True)
        (user_dir / "config.yaml").write_text("log_level: warn\n")
        assert load_config().log_level == "warn"

    def test_env_vars_expanded_in_loaded_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOOL_ASSETS", "/opt/tool/lib/lambda")
        (tmp_path / "assetwarden.yaml").write_text("assets:\n  default_assets: ${TOOL_ASSETS}\n")
        assert load_config().assets.default_assets == "/opt/tool/lib/lambda"

    def test_empty_yaml_file_returns_defaults(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("")
        assert load_config() == WardenConfig()

    def test_default_template_loads(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text(DEFAULT_CONFIG_TEMPLATE)
        assert load_config() == WardenConfig()

    def test_blank_baseline_names_field_and_file(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text('assets:\n  baseline_version: ""\n')
        with pytest.raises(ValueError) as exc_info:
            load_config()
        message = str(exc_info.value)
        assert "assetwarden.yaml" in message
        assert "assets.baseline_version" in message

    def test_unset_env_var_names_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TOOL_ASSETS", raising=False)
        (tmp_path / "assetwarden.yaml").write_text("assets:\n  default_assets: ${TOOL_ASSETS}\n")
        with pytest.raises(ValueError, match="assetwarden.yaml: environment variable TOOL_ASSETS"):
            load_config()

    def test_explicit_empty_file_does_not_fall_through(self, tmp_path):
        (tmp_path / "assetwarden.yaml").write_text("log_level: debug\n")
        cli_file = tmp_path / "empty.yaml"
        cli_file.write_text("")
        assert load_config(cli_path=str(cli_file)) == WardenConfig()
