"""Artifact packaging exports."""

from hatchpack.packager.builder import Artifact, ArtifactBuilder, build_artifact

__all__ = ["Artifact", "ArtifactBuilder", "build_artifact"]
