"""Tests for path containment and file delivery."""

import os

import pytest

from distributor.exceptions import AccessDeniedError, ContentNotFoundError, PathIsDirectoryError
from distributor.file_server import guess_mime_type, resolve_content_path, serve_file


class TestServeFile:
    """Test serve_file() gates in order."""

    def test_serves_text_file(self, content_root):
        data, mime_type = serve_file(content_root, 'a/b.txt')

        assert data == b'hello'
        assert mime_type == 'text/plain'

    def test_directory_is_rejected(self, content_root):
        with pytest.raises(PathIsDirectoryError) as exc_info:
            serve_file(content_root, 'a')
        assert exc_info.value.status_code == 400

    def test_root_itself_is_a_directory(self, content_root):
        with pytest.raises(PathIsDirectoryError):
            serve_file(content_root, '')

    def test_missing_file(self, content_root):
        with pytest.raises(ContentNotFoundError) as exc_info:
            serve_file(content_root, 'missing.txt')
        assert exc_info.value.status_code == 404

    def test_reads_from_disk_each_call(self, content_root):
        serve_file(content_root, 'a/b.txt')
        (content_root / 'a' / 'b.txt').write_bytes(b'changed')

        data, _ = serve_file(content_root, 'a/b.txt')

        assert data == b'changed'

    @pytest.mark.parametrize('payload', [
        '../secret.txt',
        '../../etc/passwd',
        'a/../../secret.txt',
        'a/c/../../../secret.txt',
    ])
    def test_traversal_is_denied(self, content_root, payload):
        (content_root.parent / 'secret.txt').write_text('top secret')

        with pytest.raises(AccessDeniedError) as exc_info:
            serve_file(content_root, payload)
        assert exc_info.value.status_code == 403

    def test_embedded_nul_is_not_found(self, content_root):
        with pytest.raises(ContentNotFoundError):
            serve_file(content_root, 'a\x00b.txt')

    def test_absolute_path_is_denied(self, content_root):
        secret = content_root.parent / 'secret.txt'
        secret.write_text('top secret')

        with pytest.raises(AccessDeniedError):
            serve_file(content_root, str(secret))

    def test_sibling_with_shared_prefix_is_denied(self, content_root):
        sibling = content_root.parent / (content_root.name + '-evil')
        sibling.mkdir()
        (sibling / 'x.txt').write_text('nope')

        with pytest.raises(AccessDeniedError):
            serve_file(content_root, f'../{sibling.name}/x.txt')

    def test_denied_even_when_target_missing(self, content_root):
        with pytest.raises(AccessDeniedError):
            serve_file(content_root, '../does-not-exist.txt')

    def test_inner_dot_segments_are_allowed(self, content_root):
        data, _ = serve_file(content_root, 'images/../a/./b.txt')
        assert data == b'hello'

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason='symlinks unavailable')
    def test_symlink_escaping_root_is_denied(self, content_root):
        outside = content_root.parent / 'outside.txt'
        outside.write_text('outside')
        (content_root / 'link.txt').symlink_to(outside)

        with pytest.raises(AccessDeniedError):
            serve_file(content_root, 'link.txt')


class TestResolveContentPath:
    """Test resolve_content_path()."""

    def test_returns_absolute_path_inside_root(self, content_root):
        resolved = resolve_content_path(content_root, 'a/b.txt')

        assert resolved == (content_root / 'a' / 'b.txt').resolve()
        assert resolved.is_absolute()

    def test_embedded_nul_raises_not_found(self, content_root):
        with pytest.raises(ContentNotFoundError):
            resolve_content_path(content_root, 'a\x00b.txt')


class TestGuessMimeType:
    """Test the extension table."""

    @pytest.mark.parametrize('name,expected', [
        ('logo.png', 'image/png'),
        ('photo.jpg', 'image/jpeg'),
        ('photo.JPEG', 'image/jpeg'),
        ('anim.gif', 'image/gif'),
        ('song.mp3', 'audio/mpeg'),
        ('clip.wav', 'audio/wav'),
        ('movie.mp4', 'video/mp4'),
        ('movie.webm', 'video/webm'),
        ('data.json', 'application/json'),
        ('notes.txt', 'text/plain'),
        ('archive.zip', 'application/octet-stream'),
        ('no_extension', 'application/octet-stream'),
    ])
    def test_mime_table(self, name, expected):
        assert guess_mime_type(name) == expected
