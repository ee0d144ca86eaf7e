"""
Dependency management for exebuild.

This package provides:
- DependencyDescriptor: immutable description of a downloadable dependency
- PackageDownloader / ArchiveExtractor: archive download and entry extraction
- DependencyResolver: presence check, download, extraction and cleanup
"""

from .dependency import DependencyDescriptor
from .downloader import ArchiveExtractor, PackageDownloader
from .resolver import DependencyResolver

__all__ = [
    "ArchiveExtractor",
    "DependencyDescriptor",
    "DependencyResolver",
    "PackageDownloader",
]
