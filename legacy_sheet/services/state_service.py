"""
Application state service - save, load, export and import appState.json

The state itself is opaque JSON owned by the editor; only the optional
'pages' list and 'savedAt' timestamp are read, for summaries.
"""
import json
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple

from legacy_sheet.services.base_service import BaseService
from legacy_sheet.services.exceptions import NotFoundError, ValidationError, handle_service_exceptions
from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

STATE_FILENAME = 'appState.json'
EXPORT_PREFIX = 'legacy-sheet-state-'


class StateSummary(NamedTuple):
    """Where a state file ended up and what it contains"""
    path: Path
    pages: int
    saved_at: str | None
    backup_path: Path | None = None


def summarize_state(state: dict, path: Path, backup_path: Path | None = None) -> StateSummary:
    pages = state.get('pages')
    return StateSummary(
        path=path,
        pages=len(pages) if isinstance(pages, list) else 0,
        saved_at=state.get('savedAt'),
        backup_path=backup_path,
    )


class StateService(BaseService):
    """File-backed store for the editor's application state"""

    def __init__(self, data_dir: str | Path, clock=None):
        super().__init__()
        self.data_dir = Path(data_dir)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def state_file(self) -> Path:
        return self.data_dir / STATE_FILENAME

    def _ensure_data_dir(self) -> None:
        if not self.data_dir.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Created data directory: {self.data_dir}")

    @staticmethod
    def _parse_state(raw: str) -> dict:
        state = json.loads(raw)
        if not isinstance(state, dict):
            raise ValidationError("Application state must be a JSON object")
        return state

    def has_state(self) -> bool:
        return self.state_file.exists()

    @handle_service_exceptions(logger)
    def save_state(self, state) -> StateSummary:
        """Persist the state object as-is"""
        if not isinstance(state, dict):
            raise ValidationError("Application state must be a JSON object")

        self._ensure_data_dir()
        self.state_file.write_text(json.dumps(state, indent=2, ensure_ascii=False), encoding='utf-8')
        self.logger.info(f"Saved application state to {self.state_file}")
        return summarize_state(state, self.state_file)

    @handle_service_exceptions(logger)
    def load_state(self) -> dict:
        """Return the saved state; NotFoundError when nothing was saved yet"""
        if not self.has_state():
            raise NotFoundError("No application state found. Save state from the editor first.")
        return self._parse_state(self.state_file.read_text(encoding='utf-8'))

    def default_export_filename(self) -> str:
        """legacy-sheet-state-YYYY-MM-DDTHH-MM-SS.json"""
        stamp = self.clock().strftime('%Y-%m-%dT%H-%M-%S')
        return f"{EXPORT_PREFIX}{stamp}.json"

    @handle_service_exceptions(logger)
    def export_state(self, filename: str | None = None, dest_dir: str | Path | None = None) -> StateSummary:
        """
        Copy the current state to a shareable file

        Args:
            filename: Target file name; generated from the current time when omitted
            dest_dir: Directory for the export (defaults to the working directory)

        Returns:
            StateSummary of the exported file
        """
        if not self.has_state():
            raise NotFoundError("No application state found. Save state from the editor first.")

        raw = self.state_file.read_text(encoding='utf-8')
        state = self._parse_state(raw)

        export_name = filename or self.default_export_filename()
        if not export_name.endswith('.json'):
            export_name += '.json'

        export_path = Path(dest_dir or Path.cwd()) / export_name
        export_path.write_text(raw, encoding='utf-8')

        self.logger.info(f"Exported application state to {export_path}")
        return summarize_state(state, export_path)

    @handle_service_exceptions(logger)
    def import_state(self, import_file: str | Path) -> StateSummary:
        """
        Replace the current state with a state file from someone else

        The existing state, if any, is first copied to appState.json.backup-<millis>.
        """
        import_path = Path(import_file).resolve()
        if not import_path.exists():
            raise NotFoundError(f"Import file not found: {import_path}")

        raw = import_path.read_text(encoding='utf-8')
        state = self._parse_state(raw)

        self._ensure_data_dir()
        backup_path = None
        if self.has_state():
            millis = int(self.clock().timestamp() * 1000)
            backup_path = self.state_file.with_name(f"{STATE_FILENAME}.backup-{millis}")
            shutil.copyfile(self.state_file, backup_path)
            self.logger.info(f"Created backup of current state: {backup_path}")

        self.state_file.write_text(raw, encoding='utf-8')
        self.logger.info(f"Imported application state from {import_path}")
        return summarize_state(state, self.state_file, backup_path)
