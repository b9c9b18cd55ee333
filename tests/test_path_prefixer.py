from __future__ import annotations

import pytest

from blobfs.Filesystem import (
    CorruptedPathDetected,
    PathNormalizer,
    PathPrefixer,
    PathPrefixMismatch,
    PathTraversalDetected,
)


class TestPathNormalizer:
    """Test canonical path normalization."""

    @pytest.mark.parametrize('path,expected', [
        ('file.txt', 'file.txt'),
        ('/file.txt', 'file.txt'),
        ('a//b/./c.txt', 'a/b/c.txt'),
        ('a\\b\\c.txt', 'a/b/c.txt'),
        ('dir/', 'dir'),
        ('', ''),
        ('/', ''),
    ])
    def test_normalizes_paths(self, path: str, expected: str) -> None:
        assert PathNormalizer().normalize_path(path) == expected

    @pytest.mark.parametrize('path', ['../file.txt', 'a/../../b', 'a/..'])
    def test_rejects_parent_segments(self, path: str) -> None:
        """Test that any '..' segment is refused."""
        with pytest.raises(PathTraversalDetected) as excinfo:
            PathNormalizer().normalize_path(path)

        assert excinfo.value.path == path

    def test_rejects_control_characters(self) -> None:
        with pytest.raises(CorruptedPathDetected):
            PathNormalizer().normalize_path('file\x00.txt')


class TestPathPrefixer:
    """Test mapping between paths and object keys."""

    def test_prefix_is_stored_with_a_single_separator(self) -> None:
        assert PathPrefixer('ci').prefix == 'ci/'
        assert PathPrefixer('/ci//').prefix == 'ci/'
        assert PathPrefixer('').prefix == ''

    def test_prefixing_a_path(self) -> None:
        prefixer = PathPrefixer('ci')

        assert prefixer.prefix_path('/some/file.txt') == 'ci/some/file.txt'

    def test_prefixing_without_a_prefix(self) -> None:
        assert PathPrefixer().prefix_path('some/file.txt') == 'some/file.txt'

    def test_prefixing_a_directory_path(self) -> None:
        """Test that directory prefixes end in the separator, except for the root."""
        prefixer = PathPrefixer('ci')

        assert prefixer.prefix_directory_path('some/dir') == 'ci/some/dir/'
        assert prefixer.prefix_directory_path('some/dir/') == 'ci/some/dir/'
        assert prefixer.prefix_directory_path('') == 'ci/'
        assert PathPrefixer().prefix_directory_path('') == ''

    def test_stripping_a_prefix(self) -> None:
        prefixer = PathPrefixer('ci')

        assert prefixer.strip_prefix('ci/some/file.txt') == 'some/file.txt'
        assert prefixer.strip_directory_prefix('ci/some/dir/') == 'some/dir'

    def test_stripping_a_foreign_key_fails(self) -> None:
        with pytest.raises(PathPrefixMismatch) as excinfo:
            PathPrefixer('ci').strip_prefix('other/file.txt')

        assert excinfo.value.prefix == 'ci/'

    def test_prefixed_paths_are_rejected_on_traversal(self) -> None:
        with pytest.raises(PathTraversalDetected):
            PathPrefixer('ci').prefix_path('../escape.txt')
