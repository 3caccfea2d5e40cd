"""Subject program invocation service."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from simple_map_fuzzer.configuration.runtime_settings import (
    ACTIONS_PLACEHOLDER,
    MAP_PLACEHOLDER,
    SubjectSettings,
)
from simple_map_fuzzer.iteration_results.result_models import UNKNOWN_ERROR_CODE

from .run_contracts import SubjectOutcome

logger = logging.getLogger(__name__)


class SubjectRunner(Protocol):
    """Executes the program under test against one map and action sequence."""

    def run(self, map_path: Path, actions: str) -> SubjectOutcome: ...


class SubprocessSubjectRunner:
    """Run the configured subject command as a child process."""

    def __init__(self, settings: SubjectSettings) -> None:
        self._settings = settings

    def build_command(self, map_path: Path, actions: str) -> list[str]:
        """Substitute ``{map}`` and ``{actions}``; append both when neither appears."""
        command = list(self._settings.command)
        if not any(MAP_PLACEHOLDER in part or ACTIONS_PLACEHOLDER in part for part in command):
            return [*command, str(map_path), actions]
        return [
            part.replace(MAP_PLACEHOLDER, str(map_path)).replace(ACTIONS_PLACEHOLDER, actions)
            for part in command
        ]

    def run(self, map_path: Path, actions: str) -> SubjectOutcome:
        command = self.build_command(map_path, actions)
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._settings.timeout_seconds,
                cwd=self._settings.working_dir,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Subject timed out after %s seconds: %s", self._settings.timeout_seconds, command
            )
            return SubjectOutcome(
                exit_code=UNKNOWN_ERROR_CODE,
                output_messages=(f"Timed out after {self._settings.timeout_seconds} seconds.",),
            )
        except OSError as exc:
            logger.warning("Subject could not be started: %s", exc)
            return SubjectOutcome(
                exit_code=UNKNOWN_ERROR_CODE,
                output_messages=(f"Failed to start subject: {exc}",),
            )
        return SubjectOutcome(
            exit_code=completed.returncode,
            output_messages=output_lines(completed.stdout, completed.stderr),
        )


def output_lines(*streams: str | None) -> tuple[str, ...]:
    """Collect the non-blank, stripped lines of the given output streams in order."""
    lines: list[str] = []
    for stream in streams:
        if not stream:
            continue
        lines.extend(line.strip() for line in stream.splitlines() if line.strip())
    return tuple(lines)
