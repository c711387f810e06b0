from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from article_review.core.errors import StorageWriteError


class Storage:
    def put_bytes(self, key: str, data: bytes) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class LocalStorage(Storage):
    root: Path

    def _path(self, key: str) -> Path:
        safe_key = key.lstrip("/").replace("\\", "/")
        return self.root / safe_key

    def put_bytes(self, key: str, data: bytes) -> None:
        p = self._path(key)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(data)
        except OSError as e:
            raise StorageWriteError(f"Could not write {key!r} under {self.root}") from e


def storage_from_config(upload_dir: str) -> LocalStorage:
    return LocalStorage(root=Path(upload_dir))
