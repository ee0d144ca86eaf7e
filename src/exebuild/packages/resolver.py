"""Dependency resolution.

Checks the working directory for a dependency's required files and, when
any are missing, downloads the dependency archive, extracts each required
file and removes the archive again.
"""

import logging
from pathlib import Path
from typing import List, Optional

from exebuild.build_context import BuildContext
from exebuild.output import BuildLog
from exebuild.packages.dependency import DependencyDescriptor
from exebuild.packages.downloader import ArchiveExtractor, PackageDownloader

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Makes sure a dependency's required files exist in the working directory."""

    def __init__(
        self,
        context: BuildContext,
        build_log: BuildLog,
        downloader: Optional[PackageDownloader] = None,
        extractor: Optional[ArchiveExtractor] = None,
    ):
        """Initialize the resolver.

        Args:
            context: Build context providing the working directory
            build_log: Log receiving user-facing notifications
            downloader: Archive downloader (defaults to PackageDownloader())
            extractor: Archive extractor (defaults to ArchiveExtractor())
        """
        self.context = context
        self.build_log = build_log
        self.downloader = downloader or PackageDownloader()
        self.extractor = extractor or ArchiveExtractor()

    def missing_files(self, descriptor: DependencyDescriptor) -> List[str]:
        """Return the required files not present in the working directory."""
        return [name for name in descriptor.required_files if not (self.context.work_dir / name).exists()]

    def ensure(self, descriptor: DependencyDescriptor) -> List[Path]:
        """Ensure every required file of descriptor is present.

        Performs no network activity when all files already exist.

        Args:
            descriptor: Dependency to resolve

        Returns:
            Paths of the required files, in descriptor order

        Raises:
            DownloadError: If the archive could not be downloaded
            ExtractionError: If a required file could not be extracted
        """
        work_dir = self.context.work_dir
        missing = self.missing_files(descriptor)

        if not missing:
            self.build_log.notify(f"dependencies found: {descriptor.name}")
            return [work_dir / name for name in descriptor.required_files]

        self.build_log.notify(f"missing dependencies: {', '.join(missing)}")
        archive_path = work_dir / descriptor.archive_file_name

        self.build_log.detail(f"Downloading {descriptor.url}")
        self.downloader.download(descriptor.url, archive_path, show_progress=self.context.show_progress)

        try:
            resolved = []
            for name in descriptor.required_files:
                self.build_log.detail(f"Extracting {name}")
                resolved.append(self.extractor.extract_entry(archive_path, name, work_dir, overwrite=True))
        finally:
            self._remove_archive(archive_path)

        self.build_log.notify(f"dependencies installed: {descriptor.name}")
        return resolved

    @staticmethod
    def _remove_archive(archive_path: Path) -> None:
        try:
            archive_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove archive %s: %s", archive_path, e)
