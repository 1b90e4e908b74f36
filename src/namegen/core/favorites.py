"""JSON-file store for saved (favorited) names."""

import json
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from namegen.core.errors import DuplicateSavedName, SavedNameError
from namegen.core.logging import get_logger
from namegen.schemas.generation import SavedName

logger = get_logger("namegen.favorites")


class SavedNameStore:
    """Saved names persisted as a JSON list; one entry per (name, tool) pair."""

    def __init__(self, path: Path):
        """Initialize store backed by the given file."""
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> list[SavedName]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [SavedName.model_validate(item) for item in data]
        except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
            raise SavedNameError(f"Could not read saved names from {self.path}: {e}") from e

    def _write(self, entries: list[SavedName]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [entry.model_dump(mode="json") for entry in entries]
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    @staticmethod
    def _clean(name: str, tool_slug: str) -> tuple[str, str]:
        name = (name or "").strip()
        tool_slug = (tool_slug or "").strip()
        if not name:
            raise SavedNameError("Name text is required")
        if not tool_slug:
            raise SavedNameError("Tool slug is required")
        return name, tool_slug

    def save(self, name: str, tool_slug: str) -> SavedName:
        """
        Save a name.

        Args:
            name: Name text (trimmed)
            tool_slug: Slug of the tool that generated it (trimmed)

        Returns:
            The stored SavedName

        Raises:
            SavedNameError: If name or slug is blank
            DuplicateSavedName: If this name is already saved for this tool
        """
        name, tool_slug = self._clean(name, tool_slug)
        with self._lock:
            entries = self._read()
            if any(e.name_text == name and e.tool_slug == tool_slug for e in entries):
                raise DuplicateSavedName(f"'{name}' is already in your favorites")
            saved = SavedName(name_text=name, tool_slug=tool_slug)
            entries.append(saved)
            self._write(entries)

        logger.info("Saved name", context={"tool_slug": tool_slug})
        return saved

    def save_many(self, names: Iterable[str], tool_slug: str) -> list[SavedName]:
        """Save several names, skipping ones already saved. Returns the newly stored entries."""
        stored = []
        for name in names:
            try:
                stored.append(self.save(name, tool_slug))
            except DuplicateSavedName:
                logger.debug("Skipping already saved name", context={"tool_slug": tool_slug})
        return stored

    def remove(self, name: str, tool_slug: str) -> bool:
        """
        Remove a saved name.

        Returns:
            True if removed, False if it was not saved
        """
        name, tool_slug = self._clean(name, tool_slug)
        with self._lock:
            entries = self._read()
            kept = [e for e in entries if not (e.name_text == name and e.tool_slug == tool_slug)]
            if len(kept) == len(entries):
                return False
            self._write(kept)
        return True

    def list_saved(self, tool_slug: Optional[str] = None) -> list[SavedName]:
        """List saved names, newest first, optionally for one tool."""
        entries = self._read()
        if tool_slug is not None:
            entries = [e for e in entries if e.tool_slug == tool_slug]
        return sorted(entries, key=lambda e: e.favorited_at, reverse=True)
