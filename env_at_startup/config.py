"""Run configuration and optional YAML config file loading."""

from dataclasses import dataclass, field, replace
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml

from env_at_startup.exceptions import ConfigValidationError, ValidationError
from env_at_startup.variables import AllowList, DEFAULT_PREFIX, ReferenceScanner


# Written verbatim into processed files for unset variables under allow_missing
DEFAULT_UNDEFINED_LITERAL = "undefined"
BACKUP_SUFFIX = ".envs"


@dataclass(frozen=True)
class SubstitutionConfig:
    """
    Resolved configuration passed explicitly into every engine call.

    Attributes:
        verbose: Record and report every change with its position
        allow_list: Variables that may be substituted (empty = all)
        allow_unreplaced: Leave disallowed references in place instead of failing
        allow_missing: Replace unset variables with undefined_literal instead of failing
        rollback: Restore files from their backups instead of substituting
        debug: Verbose internal logging
        progress: Print a status line per file as it settles
        prefix: Namespace prefix of references
        undefined_literal: Replacement text for unset variables
        backup_suffix: Suffix appended to a file path to form its backup path
    """
    verbose: bool = False
    allow_list: AllowList = field(default_factory=AllowList)
    allow_unreplaced: bool = False
    allow_missing: bool = False
    rollback: bool = False
    debug: bool = False
    progress: bool = True
    prefix: str = DEFAULT_PREFIX
    undefined_literal: str = DEFAULT_UNDEFINED_LITERAL
    backup_suffix: str = BACKUP_SUFFIX

    @cached_property
    def scanner(self) -> ReferenceScanner:
        return ReferenceScanner(self.prefix)

    def backup_path(self, path: Union[str, Path]) -> Path:
        """Return the sibling backup path for a target file."""
        path = Path(path)
        return path.with_name(path.name + self.backup_suffix)

    def with_overrides(self, **overrides: Any) -> "SubstitutionConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class ConfigLoader:
    """Loads and validates an env-at-startup YAML config file."""

    BOOL_KEYS = {'allow_missing', 'allow_unreplaced', 'verbose', 'progress', 'debug'}
    STRING_KEYS = {'prefix', 'undefined_literal'}
    KNOWN_KEYS = BOOL_KEYS | STRING_KEYS | {'vars'}

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, config_path: Path, base: Optional[SubstitutionConfig] = None) -> SubstitutionConfig:
        """
        Load a config file on top of a base configuration.

        Args:
            config_path: Path to the YAML file
            base: Configuration to start from (defaults to SubstitutionConfig())

        Returns:
            Resolved SubstitutionConfig

        Raises:
            ConfigValidationError: If the file cannot be read or is invalid
        """
        self.errors = []
        base = base or SubstitutionConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load config: {e}")
            self._raise_validation_errors()

        if data is None:
            return base
        if not isinstance(data, dict):
            self._add_error("Config must be a YAML object/dictionary")
            self._raise_validation_errors()

        return self.from_dict(data, base)

    def from_dict(self, data: Dict[str, Any], base: Optional[SubstitutionConfig] = None) -> SubstitutionConfig:
        """Validate a config mapping and apply it on top of base."""
        self.errors = []
        base = base or SubstitutionConfig()
        overrides: Dict[str, Any] = {}

        for key in data:
            if key not in self.KNOWN_KEYS:
                self._add_error(f"Unknown config key '{key}'", str(key))

        for key in sorted(self.BOOL_KEYS & data.keys()):
            value = data[key]
            if not isinstance(value, bool):
                self._add_error(f"'{key}' must be a boolean, got {type(value).__name__}", key)
            else:
                overrides[key] = value

        for key in sorted(self.STRING_KEYS & data.keys()):
            value = data[key]
            if not isinstance(value, str) or not value:
                self._add_error(f"'{key}' must be a non-empty string", key)
            else:
                overrides[key] = value

        if 'vars' in data:
            allow_list = self._validate_vars(data['vars'])
            if allow_list is not None:
                overrides['allow_list'] = allow_list

        self._raise_validation_errors()
        return base.with_overrides(**overrides)

    def _validate_vars(self, value: Any) -> Optional[AllowList]:
        if value is None:
            return AllowList()
        if isinstance(value, str):
            return AllowList.parse(value)
        if isinstance(value, list):
            for i, item in enumerate(value):
                if not isinstance(item, str):
                    self._add_error(f"'vars' entries must be strings, got {type(item).__name__}", f"vars[{i}]")
                    return None
            return AllowList.parse(value)

        self._add_error(f"'vars' must be a string or a list of strings, got {type(value).__name__}", 'vars')
        return None

    def _add_error(self, message: str, path: str = ""):
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        if self.errors:
            raise ConfigValidationError(self.errors)
