from pathlib import Path

import pytest

from article_review.core.errors import StorageWriteError
from article_review.storage import LocalStorage, storage_from_config


def test_put_bytes_creates_root_and_writes_file(tmp_path: Path) -> None:
    storage = LocalStorage(root=tmp_path / 'nested' / 'uploads')

    storage.put_bytes('abc.pdf', b'%PDF')

    assert (tmp_path / 'nested' / 'uploads' / 'abc.pdf').read_bytes() == b'%PDF'


def test_put_bytes_keeps_keys_under_root(tmp_path: Path) -> None:
    storage = LocalStorage(root=tmp_path)

    storage.put_bytes('/leading.pdf', b'1')

    assert (tmp_path / 'leading.pdf').exists()


def test_put_bytes_wraps_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')
    storage = LocalStorage(root=blocker)

    with pytest.raises(StorageWriteError):
        storage.put_bytes('abc.pdf', b'%PDF')


def test_storage_from_config_uses_upload_dir(tmp_path: Path) -> None:
    storage = storage_from_config(str(tmp_path / 'uploads'))

    assert storage.root == tmp_path / 'uploads'
