"""Dependency archive download and extraction.

PackageDownloader fetches a single archive over HTTP. ArchiveExtractor pulls
one named entry out of a zip archive. Neither retries: every failure is
reported as DownloadError or ExtractionError and is fatal to the build.
"""

import fnmatch
import logging
import shutil
import zipfile
from pathlib import Path
from typing import List, Optional

import requests

from exebuild.errors import DownloadError, ExtractionError

logger = logging.getLogger(__name__)

_DOWNLOAD_TIMEOUT = 30  # seconds, applies to connect and each read
_CHUNK_SIZE = 8192
_GLOB_CHARS = set("*?[")


def _cleanup_temp_file(temp_file: Path) -> None:
    """Remove a partially written file, ignoring errors."""
    try:
        if temp_file.exists():
            temp_file.unlink()
    except OSError as e:
        logger.warning("Could not remove partial file %s: %s", temp_file, e)


class PackageDownloader:
    """Downloads dependency archives with a single streaming HTTP GET."""

    def __init__(self, timeout: float = _DOWNLOAD_TIMEOUT):
        """Initialize the downloader.

        Args:
            timeout: Connect/read timeout in seconds for the HTTP request
        """
        self.timeout = timeout

    def download(self, url: str, dest_path: Path, show_progress: bool = False) -> Path:
        """Download url to dest_path.

        The body is streamed into ``<dest_path>.download`` and renamed onto
        dest_path once complete, so an interrupted transfer never leaves a
        truncated archive under the final name.

        Args:
            url: Archive URL
            dest_path: Final archive path
            show_progress: Whether to display a tqdm progress bar

        Returns:
            Path to the downloaded archive

        Raises:
            DownloadError: If the request fails or no archive was written
        """
        temp_file = Path(str(dest_path) + ".download")

        logger.debug("Downloading %s -> %s", url, dest_path)
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                total_size = int(response.headers.get("content-length", 0))
                with open(temp_file, "wb") as f:
                    if show_progress:
                        self._write_with_progress(response, f, total_size, dest_path.name)
                    else:
                        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                            if chunk:
                                f.write(chunk)

            if dest_path.exists():
                dest_path.unlink()
            temp_file.replace(dest_path)
        except requests.RequestException as e:
            _cleanup_temp_file(temp_file)
            raise DownloadError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            _cleanup_temp_file(temp_file)
            raise DownloadError(f"Failed to write {dest_path}: {e}") from e

        if not dest_path.exists():
            raise DownloadError(f"Download of {url} did not produce {dest_path}")

        return dest_path

    @staticmethod
    def _write_with_progress(response: requests.Response, f, total_size: int, desc: str) -> None:
        from tqdm import tqdm

        with tqdm(
            total=total_size or None,
            desc=f"Downloading {desc}",
            unit="B",
            unit_scale=True,
            ncols=80,
            leave=False,
        ) as pbar:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
                    pbar.update(len(chunk))


class ArchiveExtractor:
    """Extracts single entries from zip archives."""

    @staticmethod
    def find_matching_entries(names: List[str], entry_name_pattern: str) -> List[str]:
        """Find archive entries matching a name or glob pattern.

        A pattern matches an entry if it equals (or globs) either the full
        entry name or the entry's base name. Directory entries never match.

        Args:
            names: Entry names as listed by the archive
            entry_name_pattern: Exact name or glob pattern

        Returns:
            Matching entry names in archive order
        """
        matches = []
        for name in names:
            if name.endswith("/"):
                continue
            base_name = name.rsplit("/", 1)[-1]
            if name == entry_name_pattern or base_name == entry_name_pattern:
                matches.append(name)
            elif fnmatch.fnmatchcase(name, entry_name_pattern) or fnmatch.fnmatchcase(base_name, entry_name_pattern):
                matches.append(name)
        return matches

    def extract_entry(
        self,
        archive_path: Path,
        entry_name_pattern: str,
        output_dir: Path,
        overwrite: bool = True,
    ) -> Path:
        """Extract the single entry matching entry_name_pattern into output_dir.

        The entry is written flat (without its archive folder) as
        ``output_dir / <name>``, where name is the pattern's base name, or
        the matched entry's base name when the pattern is a glob.

        Args:
            archive_path: Path to the zip archive
            entry_name_pattern: Exact entry name or glob pattern
            output_dir: Directory receiving the extracted file
            overwrite: Whether an existing output file may be replaced

        Returns:
            Path to the extracted file

        Raises:
            ExtractionError: If the archive cannot be read, the pattern does
                not match exactly one entry, or the output is missing afterwards
        """
        if not archive_path.exists():
            raise ExtractionError(f"Archive not found: {archive_path}")

        # Written beside the target and renamed, so a failed copy never
        # leaves a truncated file under the required name
        part_path: Optional[Path] = None
        try:
            with zipfile.ZipFile(archive_path, "r") as zf:
                matches = self.find_matching_entries(zf.namelist(), entry_name_pattern)
                if not matches:
                    raise ExtractionError(f"No entry matching '{entry_name_pattern}' in {archive_path.name}")
                if len(matches) > 1:
                    raise ExtractionError(f"Pattern '{entry_name_pattern}' is ambiguous in {archive_path.name}: {', '.join(matches)}")

                entry_name = matches[0]
                if _GLOB_CHARS & set(entry_name_pattern):
                    output_name = entry_name.rsplit("/", 1)[-1]
                else:
                    output_name = entry_name_pattern.rsplit("/", 1)[-1]
                output_path = output_dir / output_name

                if output_path.exists() and not overwrite:
                    raise ExtractionError(f"Refusing to overwrite existing file: {output_path}")

                output_dir.mkdir(parents=True, exist_ok=True)
                part_path = Path(str(output_path) + ".part")
                logger.debug("Extracting %s -> %s", entry_name, output_path)
                with zf.open(entry_name) as src, open(part_path, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                part_path.replace(output_path)
        except zipfile.BadZipFile as e:
            raise ExtractionError(f"Invalid zip archive {archive_path}: {e}") from e
        except OSError as e:
            if part_path is not None:
                _cleanup_temp_file(part_path)
            raise ExtractionError(f"Failed to extract '{entry_name_pattern}' from {archive_path}: {e}") from e

        if not output_path.exists():
            raise ExtractionError(f"Extracted file missing after extraction: {output_path}")

        return output_path
