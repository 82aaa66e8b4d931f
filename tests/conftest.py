"""Shared pytest fixtures for all tests."""

import zipfile
from datetime import timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from distributor.auth import create_access_token
from distributor.cache import ContentCache
from distributor.config import Settings
from distributor.main import create_app

TEST_SECRET = "test-secret"


def build_zip(zip_path: Path, entries: dict) -> Path:
    """
    Write a zip archive from a name -> content mapping.

    Names ending in "/" become directory entries and their value is ignored.

    Args:
        zip_path: Where to write the archive
        entries: Archive entry names mapped to bytes (or str)

    Returns:
        zip_path
    """
    with zipfile.ZipFile(zip_path, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in entries.items():
            if name.endswith('/'):
                archive.writestr(zipfile.ZipInfo(name), b'')
            else:
                archive.writestr(name, data)
    return zip_path


@pytest.fixture
def content_root(tmp_path):
    """
    Create a small content tree.

    Layout:
        a/b.txt        (5 bytes)
        a/c/           (empty directory)
        images/logo.png
        readme.json
    """
    root = tmp_path / 'CONTENT'
    (root / 'a' / 'c').mkdir(parents=True)
    (root / 'a' / 'b.txt').write_bytes(b'hello')
    (root / 'images').mkdir()
    (root / 'images' / 'logo.png').write_bytes(b'\x89PNG\r\n\x1a\n')
    (root / 'readme.json').write_text('{"title": "content"}')
    return root


@pytest.fixture
def settings(tmp_path, content_root):
    return Settings(
        jwt_secret=TEST_SECRET,
        archive_path=tmp_path / 'CONTENT.zip',
        content_dir=content_root,
    )


@pytest.fixture
def loaded_cache(content_root):
    cache = ContentCache(content_root)
    cache.load_cache()
    return cache


@pytest.fixture
def client(settings, loaded_cache):
    """Create FastAPI test client over the sample content tree."""
    return TestClient(create_app(settings, loaded_cache))


@pytest.fixture
def make_token():
    """
    Factory for signed tokens with the test secret.
    """
    def _make(active=True, expires_delta=timedelta(hours=1), secret=TEST_SECRET, **claims):
        return create_access_token(
            subject=claims.get('sub', 'user-1'),
            username=claims.get('username', 'tester'),
            secret=secret,
            active=active,
            role=claims.get('role', 'member'),
            expires_delta=expires_delta,
        )
    return _make


@pytest.fixture
def auth_headers(make_token):
    return {'Authorization': f'Bearer {make_token()}'}


@pytest.fixture
def make_zip(tmp_path):
    """
    Factory writing zip archives under tmp_path.
    """
    def _make(name, entries):
        return build_zip(tmp_path / name, entries)
    return _make
