"""Configuration schema and validation for platform scaffolding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from platform_scaffold.errors import ConfigError

EXTRA_KEY = "ne-platform-scaffold"
VERSION_PLACEHOLDER = "{version}"


@dataclass(frozen=True)
class ScaffoldOptions:
    """Scaffold options as declared under the `ne-platform-scaffold` key.

    None values indicate "not set" and will be inherited when merged.
    `patches` keeps declaration order (description -> patch URL).
    """

    artifact_url: str | None = None
    version: str | None = None
    build_dir: str | None = None
    patches: dict[str, str] | None = None
    patches_dir: str | None = None

    def merge(self, other: ScaffoldOptions) -> ScaffoldOptions:
        """Merge another set of options into this one.

        Values from `other` take precedence when they are not None.
        Returns a new ScaffoldOptions instance.
        """
        return ScaffoldOptions(
            artifact_url=(
                other.artifact_url
                if other.artifact_url is not None
                else self.artifact_url
            ),
            version=other.version if other.version is not None else self.version,
            build_dir=(
                other.build_dir if other.build_dir is not None else self.build_dir
            ),
            patches=other.patches if other.patches is not None else self.patches,
            patches_dir=(
                other.patches_dir
                if other.patches_dir is not None
                else self.patches_dir
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the nested manifest layout, excluding None values."""
        result: dict[str, Any] = {}
        if self.artifact_url is not None:
            result["artifact"] = {"url": self.artifact_url}
        if self.version is not None:
            result["version"] = self.version
        directories: dict[str, str] = {}
        if self.build_dir is not None:
            directories["build"] = self.build_dir
        if self.patches_dir is not None:
            directories["patches"] = self.patches_dir
        if directories:
            result["directories"] = directories
        if self.patches is not None:
            result["patches"] = dict(self.patches)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScaffoldOptions:
        """Create options from the nested manifest layout.

        Unknown keys are ignored. Scalar values are coerced to strings so
        that a YAML version such as `2.5` does not turn into a float.
        """
        artifact = data.get("artifact")
        artifact_url = None
        if isinstance(artifact, dict) and artifact.get("url") is not None:
            artifact_url = str(artifact["url"])

        version_raw = data.get("version")
        version = str(version_raw) if version_raw is not None else None

        directories = data.get("directories")
        build_dir = None
        patches_dir = None
        if isinstance(directories, dict):
            if directories.get("build") is not None:
                build_dir = str(directories["build"])
            if directories.get("patches") is not None:
                patches_dir = str(directories["patches"])

        patches_raw = data.get("patches")
        patches: dict[str, str] | None = None
        if patches_raw is not None:
            if not isinstance(patches_raw, dict):
                raise ConfigError("'patches' must map descriptions to patch URLs")
            patches = {str(desc): str(url) for desc, url in patches_raw.items()}

        return cls(
            artifact_url=artifact_url,
            version=version,
            build_dir=build_dir,
            patches=patches,
            patches_dir=patches_dir,
        )

    def validate(self) -> None:
        """Ensure required options are present and patch URLs name a file.

        Raises:
            ConfigError: Naming the first missing key path or the bad URL.
        """
        required = {
            "artifact.url": self.artifact_url,
            "version": self.version,
            "directories.build": self.build_dir,
        }
        for key, value in required.items():
            if not value:
                raise ConfigError(f"Missing required option: {EXTRA_KEY}.{key}")

        from platform_scaffold.patches.base import patch_filename_from_url

        for desc, url in (self.patches or {}).items():
            parsed = urlparse(url)
            if not parsed.scheme or not parsed.netloc:
                raise ConfigError(f"Patch '{desc}' must use an absolute URL: {url}")
            if patch_filename_from_url(url) in ("", ".", ".."):
                raise ConfigError(
                    f"Patch '{desc}' URL does not end in a file name: {url}"
                )

    @property
    def has_remote_patches(self) -> bool:
        """Whether any remote patch is declared."""
        return bool(self.patches)


def get_uri(options: ScaffoldOptions) -> str:
    """Return the artifact URL with the `{version}` token substituted."""
    if options.artifact_url is None or options.version is None:
        raise ConfigError("Artifact URL and version are required to build the URI")
    return options.artifact_url.replace(VERSION_PLACEHOLDER, options.version)


@dataclass(frozen=True)
class OptionSources:
    """Where each layer of the effective options came from."""

    manifest: str | None = None
    local_override: str | None = None
    environment: tuple[str, ...] = field(default_factory=tuple)
