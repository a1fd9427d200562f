"""Tests for configuration and YAML config file loading."""

from pathlib import Path

import pytest

from env_at_startup.config import (
    BACKUP_SUFFIX,
    DEFAULT_UNDEFINED_LITERAL,
    ConfigLoader,
    SubstitutionConfig,
)
from env_at_startup.exceptions import ConfigValidationError
from env_at_startup.variables import AllowList


class TestSubstitutionConfig:
    """Test configuration defaults and helpers."""

    def test_defaults(self):
        config = SubstitutionConfig()
        assert config.progress is True
        assert config.verbose is False
        assert config.allow_missing is False
        assert config.allow_unreplaced is False
        assert not config.allow_list
        assert config.prefix == 'process.env'
        assert config.undefined_literal == DEFAULT_UNDEFINED_LITERAL == 'undefined'
        assert config.backup_suffix == BACKUP_SUFFIX == '.envs'

    def test_backup_path_is_sibling(self):
        config = SubstitutionConfig()
        assert config.backup_path('dist/main.js') == Path('dist/main.js.envs')

    def test_with_overrides_ignores_none(self):
        config = SubstitutionConfig(verbose=True).with_overrides(verbose=None, allow_missing=True)
        assert config.verbose is True
        assert config.allow_missing is True

    def test_scanner_uses_prefix(self):
        config = SubstitutionConfig(prefix='import.meta.env')
        assert config.scanner.prefix == 'import.meta.env'


class TestConfigLoader:
    """Test YAML config validation."""

    def write_config(self, tmp_path, content):
        path = tmp_path / 'env-at-startup.yaml'
        path.write_text(content)
        return path

    def test_load_all_keys(self, tmp_path):
        path = self.write_config(tmp_path, """
vars:
  - API_URL
  - NEXT_PUBLIC_*
allow_missing: true
allow_unreplaced: true
verbose: true
progress: false
debug: true
prefix: import.meta.env
undefined_literal: "null"
""")
        config = ConfigLoader().load(path)

        assert config.allow_list == AllowList.parse('API_URL,NEXT_PUBLIC_*')
        assert config.allow_missing is True
        assert config.allow_unreplaced is True
        assert config.verbose is True
        assert config.progress is False
        assert config.debug is True
        assert config.prefix == 'import.meta.env'
        assert config.undefined_literal == 'null'

    def test_vars_as_string(self, tmp_path):
        path = self.write_config(tmp_path, "vars: 'API_URL,DEBUG'\n")
        config = ConfigLoader().load(path)
        assert config.allow_list.tokens == ('API_URL', 'DEBUG')

    def test_empty_file_keeps_base(self, tmp_path):
        path = self.write_config(tmp_path, "")
        base = SubstitutionConfig(verbose=True)
        assert ConfigLoader().load(path, base) == base

    def test_all_errors_collected(self, tmp_path):
        path = self.write_config(tmp_path, """
verbose: "yes"
unknown: 1
prefix: ""
""")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigLoader().load(path)

        errors = exc_info.value.errors
        assert exc_info.value.exit_code == 2
        assert {e.path for e in errors} == {'verbose', 'unknown', 'prefix'}
        assert "Unknown config key 'unknown'" in str(exc_info.value)

    def test_invalid_vars_entry(self, tmp_path):
        path = self.write_config(tmp_path, "vars: [API_URL, 3]\n")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigLoader().load(path)
        assert exc_info.value.errors[0].path == 'vars[1]'

    def test_non_mapping_rejected(self, tmp_path):
        path = self.write_config(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigValidationError):
            ConfigLoader().load(path)

    def test_invalid_yaml_rejected(self, tmp_path):
        path = self.write_config(tmp_path, "vars: [unclosed\n")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigLoader().load(path)
        assert "Failed to load config" in str(exc_info.value)

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(ConfigValidationError):
            ConfigLoader().load(tmp_path / 'missing.yaml')
