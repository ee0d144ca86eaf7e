"""Build step for exebuild: runs the external compiler."""

from .builder import Builder, output_artifact_path

__all__ = ["Builder", "output_artifact_path"]
