"""Snapshot persistence for engine state.

The engine persists two independent versioned documents, the correction
store and the user profile. Callers hand over plain JSON-compatible dicts;
this module only knows how to put them somewhere durable and get them back.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from correction_engine.errors import PersistenceError

CORRECTIONS_DOCUMENT = "user_corrections"
PROFILE_DOCUMENT = "user_profile"


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    """Write data to a file atomically.

    Writes to a temporary file in the same directory, then renames to target,
    so an interrupted write never leaves a truncated snapshot behind.

    Args:
        path: Target file path
        data: String data to write
        encoding: File encoding (default utf-8)

    Raises:
        PersistenceError: If the write operation fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    temp_path = None
    try:
        fd, temp_path = tempfile.mkstemp(
            suffix=".tmp",
            prefix=path.stem + "_",
            dir=path.parent,
        )
        os.write(fd, data.encode(encoding))
        os.fsync(fd)
        os.close(fd)
        fd = None

        os.replace(temp_path, path)
        temp_path = None

    except OSError as e:
        raise PersistenceError(f"Failed to write {path}: {e}", context={"path": str(path)}) from e
    finally:
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass
        if temp_path is not None:
            try:
                os.unlink(temp_path)
            except OSError:
                pass


def atomic_write_json(path: Path, data: dict | list, indent: int = 2) -> None:
    """Write JSON data to a file atomically.

    Args:
        path: Target file path
        data: Data to serialize as JSON
        indent: JSON indentation level (default 2)
    """
    try:
        json_str = json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Cannot serialize data for {path}: {e}") from e
    atomic_write(path, json_str)


def read_json(path: Path) -> Any:
    """Read JSON data from a file.

    Args:
        path: File path to read

    Returns:
        Parsed JSON data

    Raises:
        PersistenceError: If the file cannot be read or is invalid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise PersistenceError(f"Cannot read {path}: {e}", context={"path": str(path)}) from e
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Invalid JSON in {path}: {e}", context={"path": str(path)}) from e


@runtime_checkable
class SnapshotStorage(Protocol):
    """Load/save of opaque named snapshots."""

    def load(self, name: str) -> dict[str, Any] | None:
        """Return the stored document, or None when nothing was saved yet."""
        ...

    def save(self, name: str, data: dict[str, Any]) -> None:
        """Persist a document, replacing any previous version."""
        ...


class JsonFileStorage:
    """Stores each snapshot as ``<root>/<name>.json``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def load(self, name: str) -> dict[str, Any] | None:
        path = self.path_for(name)
        if not path.exists():
            return None

        data = read_json(path)
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Snapshot {path} is not a JSON object",
                context={"path": str(path)},
            )
        return data

    def save(self, name: str, data: dict[str, Any]) -> None:
        atomic_write_json(self.path_for(name), data)


class MemoryStorage:
    """In-process snapshot storage, used for tests and embedding."""

    def __init__(self):
        self._documents: dict[str, dict[str, Any]] = {}

    def load(self, name: str) -> dict[str, Any] | None:
        data = self._documents.get(name)
        return copy.deepcopy(data) if data is not None else None

    def save(self, name: str, data: dict[str, Any]) -> None:
        # Round-trip through JSON so unserializable payloads fail here too
        try:
            self._documents[name] = json.loads(json.dumps(data))
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize snapshot {name}: {e}") from e

    def __contains__(self, name: str) -> bool:
        return name in self._documents
