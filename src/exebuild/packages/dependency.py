"""
Dependency descriptor model.

A descriptor names an external dependency, where its archive is fetched
from, and which files must exist in the working directory once it is
resolved. Descriptors are created once at startup and never mutated.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class DependencyDescriptor:
    """
    Immutable description of a downloadable dependency.

    Attributes:
        name: Human-readable label (e.g., "Ahk2Exe")
        url: Source location of the downloadable zip archive
        archive_file_name: Local file name given to the downloaded archive
        required_files: Ordered file names expected after resolution
    """

    name: str
    url: str
    archive_file_name: str
    required_files: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the record stays hashable
        if not isinstance(self.required_files, tuple):
            object.__setattr__(self, "required_files", tuple(self.required_files))
        if not self.required_files:
            raise ValueError(f"Dependency '{self.name}' must list at least one required file")
        if not self.archive_file_name:
            raise ValueError(f"Dependency '{self.name}' must have an archive file name")

    @classmethod
    def create(cls, name: str, url: str, archive_file_name: str, required_files: Sequence[str]) -> "DependencyDescriptor":
        """Create a descriptor from any sequence of required file names."""
        return cls(
            name=name,
            url=url,
            archive_file_name=archive_file_name,
            required_files=tuple(required_files),
        )
