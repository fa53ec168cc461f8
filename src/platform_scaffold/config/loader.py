"""Scaffold option loading and merging."""

import json
import logging
import os
from pathlib import Path

import yaml

from platform_scaffold.config.schema import EXTRA_KEY, OptionSources, ScaffoldOptions
from platform_scaffold.errors import ConfigError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "composer.json"
CONFIG_FILENAME = "config.yaml"
LOCAL_CONFIG_DIRNAME = ".platform-scaffold"

ENV_VERSION = "PLATFORM_SCAFFOLD_VERSION"
ENV_BUILD_DIR = "PLATFORM_SCAFFOLD_BUILD_DIR"


def get_manifest_path(project_root: Path) -> Path:
    """Get path to the default manifest: <project_root>/composer.json."""
    return project_root / MANIFEST_FILENAME


def get_local_config_path(project_root: Path) -> Path:
    """Get path to local overrides: <project_root>/.platform-scaffold/config.yaml."""
    return project_root / LOCAL_CONFIG_DIRNAME / CONFIG_FILENAME


def local_config_exists(project_root: Path) -> bool:
    """Check if the local override file exists."""
    return get_local_config_path(project_root).exists()


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if data is None:
                return None
            if not isinstance(data, dict):
                return None
            result: dict[str, object] = data
            return result
    except (yaml.YAMLError, UnicodeDecodeError, OSError):
        logger.warning("Ignoring unreadable YAML config: %s", path)
        return None


def load_manifest(path: Path) -> ScaffoldOptions:
    """Load scaffold options from a package manifest.

    A JSON manifest (composer.json) keeps the options under
    `extra.ne-platform-scaffold`. A YAML manifest keeps them under a
    top-level `ne-platform-scaffold` key.

    Raises:
        ConfigError: If the manifest is missing, malformed, or has no
            scaffold section.
    """
    if not path.exists():
        raise ConfigError(f"Manifest not found: {path}")

    if path.suffix in (".yaml", ".yml"):
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
            raise ConfigError(f"Invalid YAML manifest {path}: {e}") from e
        section = data.get(EXTRA_KEY) if isinstance(data, dict) else None
    else:
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise ConfigError(f"Invalid JSON manifest {path}: {e}") from e
        extra = data.get("extra") if isinstance(data, dict) else None
        section = extra.get(EXTRA_KEY) if isinstance(extra, dict) else None

    if not isinstance(section, dict):
        raise ConfigError(f"No '{EXTRA_KEY}' section in manifest: {path}")

    return ScaffoldOptions.from_dict(section)


def load_env_overrides() -> tuple[ScaffoldOptions, tuple[str, ...]]:
    """Read option overrides from the environment.

    Returns the overrides and the names of the variables that were set.
    """
    version = os.environ.get(ENV_VERSION) or None
    build_dir = os.environ.get(ENV_BUILD_DIR) or None
    used = tuple(
        name
        for name, value in ((ENV_VERSION, version), (ENV_BUILD_DIR, build_dir))
        if value
    )
    return ScaffoldOptions(version=version, build_dir=build_dir), used


def load_options(
    project_root: Path,
    manifest: Path | None = None,
    overrides: ScaffoldOptions | None = None,
) -> tuple[ScaffoldOptions, OptionSources]:
    """Load merged scaffold options.

    Precedence (lowest to highest):
    1. Manifest (composer.json or the given path)
    2. Local overrides (./.platform-scaffold/config.yaml)
    3. Environment variables
    4. Explicit overrides (CLI flags)

    Returns the validated options and where they came from.
    """
    manifest_path = manifest or get_manifest_path(project_root)
    options = load_manifest(manifest_path)
    logger.debug("Loaded scaffold options from %s", manifest_path)

    local_path = get_local_config_path(project_root)
    local_data = load_yaml_config(local_path)
    local_source = None
    if local_data:
        options = options.merge(ScaffoldOptions.from_dict(local_data))
        local_source = str(local_path)
        logger.debug("Applied local overrides from %s", local_path)

    env_options, env_used = load_env_overrides()
    options = options.merge(env_options)

    if overrides is not None:
        options = options.merge(overrides)

    options.validate()

    sources = OptionSources(
        manifest=str(manifest_path),
        local_override=local_source,
        environment=env_used,
    )
    return options, sources
