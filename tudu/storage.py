"""
JSON persistence for the todo list.

The whole collection is rewritten after every mutation. Documents are
validated against ``schemas/todos.schema.json`` when loaded.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from jsonschema import SchemaError, ValidationError, validate

from tudu.errors import StorageError
from tudu.models import Task

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"
SCHEMA_FILE = Path(__file__).resolve().parent / "schemas" / "todos.schema.json"


def validate_document(data: dict) -> tuple[bool, str]:
    """Validate a todo document against the schema. Returns (valid, error_message)."""
    try:
        schema = json.loads(SCHEMA_FILE.read_text())
        validate(instance=data, schema=schema)
        return True, ""
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"
    except ValidationError as e:
        # Build a helpful error message with path to the error
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return False, f"Validation error at '{path}': {e.message}"


class TaskStore:
    """Loads and saves the task collection at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> list[Task]:
        """Load tasks; a missing file is an empty list."""
        if not self.path.exists():
            logger.info("No todo file at %s, starting empty", self.path)
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Cannot read {self.path}: not a todo document")
        valid, msg = validate_document(data)
        if not valid:
            raise StorageError(f"Invalid todo file {self.path}: {msg}")

        tasks = [Task.from_dict(item) for item in data["todos"]]
        logger.debug("Loaded %d todo(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Write all tasks, replacing the file atomically."""
        document = {
            "version": FORMAT_VERSION,
            "updated_at": datetime.now().isoformat(),
            "todos": [t.to_dict() for t in tasks],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Saved %d todo(s) to %s", len(tasks), self.path)
