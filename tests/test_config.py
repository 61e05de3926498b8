"""Tests for configuration loading."""

import pytest

from htmlguard.core.config import load_config
from htmlguard.core.errors import ConfigError, HtmlGuardError
from htmlguard.core.models import AppConfig, SanitizerEngine
from htmlguard.sanitizer.factory import build_policy, build_sanitizer
from htmlguard.sanitizer.lexical import HtmlSanitizer
from htmlguard.sanitizer.tree import BleachSanitizer

_YAML = """
sanitizer:
  engine: bleach
  extra_tags: [details, summary]
  extra_attributes:
    img: [loading]
  extra_dangerous_protocols: [file]
web:
  port: 9001
  max_input_bytes: 2048
log_level: debug
"""


class TestLoadConfig:
    """Tests for load_config function."""

    def test_yaml_values(self, config_file):
        """Test that YAML values populate the models."""
        cfg = load_config(config_file(_YAML))
        assert cfg.sanitizer.engine == SanitizerEngine.BLEACH
        assert cfg.sanitizer.extra_tags == ["details", "summary"]
        assert cfg.sanitizer.extra_attributes == {"img": ["loading"]}
        assert cfg.web.port == 9001
        assert cfg.web.max_input_bytes == 2048
        assert cfg.log_level == "DEBUG"

    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        """Test that missing default config yields model defaults."""
        monkeypatch.chdir(tmp_path)
        cfg = load_config()
        assert cfg.sanitizer.engine == SanitizerEngine.LEXICAL
        assert cfg.web.host == "127.0.0.1"
        assert cfg.web.port == 8000

    def test_env_overrides_yaml(self, config_file, monkeypatch):
        """Test that environment variables win over YAML."""
        path = config_file(_YAML)
        monkeypatch.setenv("HTMLGUARD_ENGINE", "LEXICAL")
        monkeypatch.setenv("HTMLGUARD_EXTRA_TAGS", "mark, kbd ,")
        monkeypatch.setenv("HTMLGUARD_PORT", "9999")
        cfg = load_config(path)
        assert cfg.sanitizer.engine == SanitizerEngine.LEXICAL
        assert cfg.sanitizer.extra_tags == ["mark", "kbd"]
        assert cfg.web.port == 9999

    def test_unknown_engine(self, config_file):
        """Test that an unknown engine raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(config_file("sanitizer:\n  engine: regex2000\n"))

    def test_bad_port(self, config_file, monkeypatch):
        """Test that a non-numeric port raises ConfigError."""
        path = config_file("web: {}\n")
        monkeypatch.setenv("HTMLGUARD_PORT", "eighty")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_yaml(self, config_file):
        """Test that malformed YAML raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(config_file("sanitizer: [\n"))

    def test_non_mapping_yaml(self, config_file):
        """Test that a top-level list is rejected."""
        with pytest.raises(ConfigError):
            load_config(config_file("- a\n- b\n"))

    @pytest.mark.parametrize("text", ["sanitizer: [a]\n", "web: 8000\n", "sanitizer: strict\n"])
    def test_non_mapping_section(self, config_file, text):
        """Test that a section that is not a mapping raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(config_file(text))

    def test_numeric_log_level(self, config_file):
        """Test that a numeric log_level raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(config_file("log_level: 10\n"))

    def test_unknown_log_level(self, config_file, monkeypatch):
        """Test that an unknown level name from the environment is rejected."""
        path = config_file("log_level: info\n")
        monkeypatch.setenv("HTMLGUARD_LOG_LEVEL", "loud")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_empty_section_uses_defaults(self, config_file):
        """Test that an empty section falls back to defaults."""
        cfg = load_config(config_file("sanitizer:\nweb:\n"))
        assert cfg.sanitizer.engine == SanitizerEngine.LEXICAL
        assert cfg.web.port == 8000

    def test_missing_explicit_file(self, tmp_path):
        """Test that an explicit path that does not exist is an error."""
        with pytest.raises(HtmlGuardError):
            load_config(str(tmp_path / "nope.yaml"))


class TestFactory:
    """Tests for build_policy and build_sanitizer."""

    def test_default_policy_reused(self):
        """Test that no extras means the built-in policy."""
        from htmlguard.core.policy import DEFAULT_POLICY

        assert build_policy(AppConfig()) is DEFAULT_POLICY

    def test_extras_applied(self, config_file):
        """Test that configured extras extend the policy."""
        policy = build_policy(load_config(config_file(_YAML)))
        assert {"details", "summary"}.issubset(policy.tags)
        assert "loading" in policy.allowed_attributes_for("img")
        assert "file:" in policy.dangerous_protocols

    def test_engine_selection(self, config_file):
        """Test that the configured engine is built and can be overridden."""
        cfg = load_config(config_file(_YAML))
        assert isinstance(build_sanitizer(cfg), BleachSanitizer)
        assert isinstance(build_sanitizer(cfg, SanitizerEngine.LEXICAL), HtmlSanitizer)
        assert isinstance(build_sanitizer(AppConfig()), HtmlSanitizer)
