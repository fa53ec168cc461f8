"""Patch definitions and per-patch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Literal
from urllib.parse import urlparse

PatchSource = Literal["local", "remote"]


class PatchStatus(Enum):
    """Outcome of applying a single patch."""

    APPLIED = "applied"
    CHECK_FAILED = "check_failed"
    APPLY_FAILED = "apply_failed"


def patch_filename_from_url(url: str) -> str:
    """Return the final path segment of a patch URL.

    Query string and fragment are ignored and the segment is kept as
    written (no percent-decoding):
    `https://example.org/a/b/fix-123.patch?x=1` -> `fix-123.patch`.
    Returns an empty string when the path has no final segment.
    """
    return PurePosixPath(urlparse(url).path).name


@dataclass(frozen=True)
class PatchSpec:
    """A patch to stage into the build directory and apply."""

    filename: str
    source: PatchSource
    description: str
    path: Path | None = None  # bundled file, for local patches
    url: str | None = None  # download location, for remote patches

    @classmethod
    def local(cls, path: Path) -> PatchSpec:
        """Create a spec for a bundled patch file."""
        return cls(
            filename=path.name,
            source="local",
            description=path.name,
            path=path,
        )

    @classmethod
    def remote(cls, description: str, url: str) -> PatchSpec:
        """Create a spec for a patch declared in configuration."""
        return cls(
            filename=patch_filename_from_url(url),
            source="remote",
            description=description,
            url=url,
        )


@dataclass(frozen=True)
class PatchResult:
    """Result of checking and applying one patch."""

    patch: PatchSpec
    status: PatchStatus
    output: str = ""  # captured diagnostics from git

    @property
    def ok(self) -> bool:
        return self.status is PatchStatus.APPLIED


@dataclass
class ScaffoldReport:
    """Per-patch results of a scaffolding run, in application order."""

    results: list[PatchResult] = field(default_factory=list)

    def add(self, result: PatchResult) -> None:
        self.results.append(result)

    @property
    def applied(self) -> list[PatchResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[PatchResult]:
        return [r for r in self.results if not r.ok]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
