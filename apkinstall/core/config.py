"""Settings loading and validation for the optional YAML config file."""

from __future__ import annotations

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from apkinstall.core.errors import ConfigLoadError, ConfigValidationError
from apkinstall.core.model import Settings

CONFIG_FILENAME = "config.yaml"
LOGGER = logging.getLogger(__name__)


class SettingsLoader(yaml.SafeLoader):
    """Safe YAML loader for settings: duplicate keys are errors, yes/no/on/off stay strings."""


# No setting is boolean, so `preferred_keyword: on` must load as the keyword "on".
SettingsLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _unique_mapping(loader: SettingsLoader, node: yaml.MappingNode, deep: bool = False) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    for key_node, value_node in node.value:
        name = loader.construct_object(key_node, deep=deep)
        if name in settings:
            raise ConfigValidationError(f"Setting '{name}' is given more than once")
        settings[name] = loader.construct_object(value_node, deep=deep)
    return settings


SettingsLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _unique_mapping)


def _load_schema_validator() -> Any:
    schema_text = resources.files("apkinstall").joinpath("schemas/config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "apkinstall" / CONFIG_FILENAME


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read settings file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=SettingsLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    # An empty file is the same as no settings at all.
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Settings file {path} must contain a mapping at root")
    return loaded


def build_settings(doc: dict[str, Any], source: Path | str = "<settings>") -> Settings:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    defaults = Settings()
    timeout = doc.get("timeout_s", defaults.timeout_s)
    return Settings(
        adb_path=doc.get("adb_path", defaults.adb_path),
        package_suffix=doc.get("package_suffix", defaults.package_suffix).lower(),
        preferred_keyword=doc.get("preferred_keyword", defaults.preferred_keyword),
        install_flags=tuple(doc.get("install_flags", defaults.install_flags)),
        timeout_s=float(timeout) if timeout is not None else None,
    )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from *path*, or from the XDG config location by default.

    A missing file yields the defaults.
    """
    path = path or config_path()
    if not path.is_file():
        LOGGER.debug("No settings file at %s, using defaults", path)
        return Settings()

    LOGGER.info("Loading settings from %s", path)
    return build_settings(_read_yaml(path), path)
