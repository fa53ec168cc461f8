"""Release artifact download and extraction."""

import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from platform_scaffold import __version__
from platform_scaffold.errors import DownloadError, ExtractionError
from platform_scaffold.executors import CommandExecutor

logger = logging.getLogger(__name__)

ARTIFACT_FILENAME = "artifact.tar.gz"
BUILD_DIR_MODE = 0o777
USER_AGENT = f"platform-scaffold/{__version__}"


def download_file(url: str, destination: Path) -> None:
    """Fetch url and save it to destination.

    A failed download leaves no partial file behind.

    Raises:
        DownloadError: On any network or write failure.
    """
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    logger.info("Downloading %s -> %s", url, destination)
    try:
        with urllib.request.urlopen(req) as resp, destination.open("wb") as handle:
            shutil.copyfileobj(resp, handle)
    except (urllib.error.URLError, OSError) as e:
        if destination.is_file():
            destination.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e


def recreate_directory(path: Path) -> None:
    """Remove path recursively if it exists, then create it with parents."""
    if path.is_dir():
        logger.info("Removing existing build directory: %s", path)
        shutil.rmtree(path)
    path.mkdir(mode=BUILD_DIR_MODE, parents=True, exist_ok=True)


def extract_tarball(
    archive: Path, destination: Path, executor: CommandExecutor
) -> None:
    """Extract a gzip-compressed tarball into destination with tar.

    Raises:
        ExtractionError: If tar exits with a non-zero status.
    """
    result = executor.execute(
        ["tar", "-xzvf", str(archive), "--directory", str(destination)]
    )
    if not result.ok:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise ExtractionError(
            f"Failed to extract {archive} ({result.display}): {detail}"
        )
