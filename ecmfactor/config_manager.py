"""
YAML settings files for ecmfactor.

A run reads ecmfactor.yaml and, if present, ecmfactor.local.yaml from the
same directory; the local file is merged over the base one key by key so
it only needs to name the settings it changes.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)


class ConfigManager:
    """Read a base settings file plus its local override."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.ConfigManager")
        self.sources: List[Path] = []

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Read config_path and merge <stem>.local.yaml over it.

        A broken local file is logged and skipped so a bad override never
        hides the shipped settings. ``sources`` lists the files that were
        actually used.

        Raises:
            FileNotFoundError: If config_path does not exist
            yaml.YAMLError: If config_path is not valid YAML
        """
        base_path = Path(config_path)
        if not base_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.sources = []
        config = self._read(base_path)

        local_path = self.local_path(base_path)
        if not local_path.exists():
            return config
        try:
            override = self._read(local_path)
        except yaml.YAMLError as e:
            self.logger.error(f"Ignoring unreadable override {local_path}: {e}")
            return config
        return self.deep_merge(config, override)

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        self.sources.append(path)
        if data is None:
            self.logger.warning(f"Configuration file is empty: {path}")
            return {}
        if not isinstance(data, dict):
            raise yaml.YAMLError(f"{path} must hold a mapping of sections, got {type(data).__name__}")
        self.logger.debug(f"Read settings from {path}")
        return data

    @staticmethod
    def local_path(base_path: Path) -> Path:
        """ecmfactor.yaml -> ecmfactor.local.yaml, in the same directory."""
        return base_path.parent / f"{base_path.stem}.local.yaml"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge override into a copy of base.

        Sections present in both are merged recursively; any other value
        from override replaces the one in base.

        Example:
            base = {'factorisation': {'digits': 8, 'max_digits': 64}}
            override = {'factorisation': {'max_digits': 40}}
            result = {'factorisation': {'digits': 8, 'max_digits': 40}}
        """
        result = base.copy()
        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def check_keys(self, config: Mapping[str, Any],
                   known: Mapping[str, Sequence[str]]) -> List[str]:
        """
        List the settings in config that ``known`` does not describe.

        Args:
            config: Loaded settings, section -> {key: value}
            known: Section name -> accepted keys

        Returns:
            Unknown entries as 'section' or 'section.key', in file order;
            each one is also logged as an error
        """
        unknown: List[str] = []
        for section, values in config.items():
            keys: Optional[Sequence[str]] = known.get(section)
            if keys is None:
                unknown.append(str(section))
            elif isinstance(values, dict):
                unknown.extend(f"{section}.{key}" for key in values if key not in keys)
            elif values is not None:
                unknown.append(f"{section} (expected a mapping)")

        for entry in unknown:
            self.logger.error(f"Unknown configuration setting: {entry}")
        return unknown
