"""Persist generated artifacts to the run's map directory."""

from __future__ import annotations

from pathlib import Path

from .artifact_models import Artifact


def write_artifact(artifact: Artifact, directory: Path | str) -> Path:
    """Write the stored form of ``artifact`` below ``directory`` and return its path.

    Raises:
      FileExistsError: If a file with the artifact's name already exists.
      OSError: If the file cannot be written.
    """
    target_directory = Path(directory)
    target_directory.mkdir(parents=True, exist_ok=True)
    destination = target_directory / artifact.source_name
    if destination.exists():
        raise FileExistsError(f"Map file already exists: {destination.resolve()}")
    destination.write_bytes(artifact.stored_bytes())
    return destination.resolve()


def read_map_text(path: Path | str) -> str:
    """Read a stored text map back as a single string."""
    return Path(path).read_text(encoding="utf-8")
