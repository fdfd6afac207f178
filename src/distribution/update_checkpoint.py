"""Update checkpoint persistence.

This module records which dependency archives an update run has already
extracted, so a resumed run can skip them after a failure.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import hashlib
import json
from pathlib import Path

from core.constants import STATE_DIR_NAME, UPDATE_CHECKPOINT_FILE_NAME
from core.errors import ParcelCheckpointError
from core.types import Manifest


@dataclass(frozen=True)
class UpdateCheckpointState:
    """Checkpoint state metadata."""

    run_signature: str
    extracted: tuple[str, ...]


class UpdateCheckpointStore:
    """Filesystem-backed update checkpoint store."""

    def __init__(self, work_dir: Path) -> None:
        self._state_path = work_dir / STATE_DIR_NAME / UPDATE_CHECKPOINT_FILE_NAME

    def prepare_run(self, run_signature: str) -> UpdateCheckpointState:
        """Prepare checkpoint state for a resumed run.

        Recorded progress is kept only when the stored signature matches;
        otherwise the run starts from the first dependency.

        Args:
            run_signature: Deterministic signature of the manifest.

        Returns:
            Checkpoint state for the current run.
        """
        state = self._read_state()
        if state is not None and state.run_signature == run_signature:
            return state
        state = UpdateCheckpointState(run_signature=run_signature, extracted=())
        self._write_state(state)
        return state

    def mark_extracted(
        self,
        state: UpdateCheckpointState,
        archive_name: str,
    ) -> UpdateCheckpointState:
        """Persist one more extracted dependency archive."""
        updated_state = UpdateCheckpointState(
            run_signature=state.run_signature,
            extracted=state.extracted + (archive_name,),
        )
        self._write_state(updated_state)
        return updated_state

    def clear(self) -> None:
        """Remove checkpoint state when a state file is present."""
        if not self._state_path.is_file():
            return
        try:
            self._state_path.unlink()
        except OSError as error:
            raise ParcelCheckpointError(
                f"Failed to remove update checkpoint at {self._state_path}: {error}. "
                "Check working directory permissions."
            ) from error

    def _read_state(self) -> UpdateCheckpointState | None:
        """Read checkpoint state file if present."""
        if not self._state_path.is_file():
            return None
        try:
            payload = json.loads(self._state_path.read_text(encoding="utf-8"))
            return UpdateCheckpointState(
                run_signature=str(payload["run_signature"]),
                extracted=tuple(str(name) for name in payload["extracted"]),
            )
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as error:
            raise ParcelCheckpointError(
                f"Failed to read update checkpoint at {self._state_path}: {error}. "
                "Delete the checkpoint file and retry update."
            ) from error

    def _write_state(self, state: UpdateCheckpointState) -> None:
        """Write checkpoint state file."""
        try:
            self._state_path.parent.mkdir(parents=True, exist_ok=True)
            self._state_path.write_text(
                json.dumps(asdict(state), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as error:
            raise ParcelCheckpointError(
                f"Failed to write update checkpoint at {self._state_path}: {error}. "
                "Check working directory permissions."
            ) from error


def build_update_signature(manifest: Manifest) -> str:
    """Build deterministic manifest signature for checkpoint matching."""
    signature_payload = {
        "name": manifest.name,
        "version": manifest.version,
        "dependencies": [[ref.name, ref.version] for ref in manifest.dependencies],
    }
    serialized_payload = json.dumps(signature_payload, sort_keys=True)
    return hashlib.sha256(serialized_payload.encode("utf-8")).hexdigest()
