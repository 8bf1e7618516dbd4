from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from connkit.errors import StoreCorruptError
from connkit.models.document import NativeDocument
from connkit.store.memory import MemoryConnectionStore

logger = logging.getLogger(__name__)


class JsonFileStore(MemoryConnectionStore):
    """Memory store persisted as a native document after every mutation or completed batch.

    There is no file locking; concurrent writers must be serialized by the caller.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = path
        if path.exists():
            self._load(self._read())
            logger.debug("Loaded %d connections from %s", len(self._connections), self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> NativeDocument:
        try:
            return NativeDocument.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StoreCorruptError(self._path, str(e)) from e
        except ValidationError as e:
            raise StoreCorruptError(self._path, f"{e.error_count()} validation error(s)") from e

    def _changed(self) -> None:
        self.save()

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(self.snapshot().to_json(), encoding="utf-8")
        tmp_path.replace(self._path)
