from __future__ import annotations

import pytest

from blobfs.Filesystem import UnableToSetVisibility, Visibility, VisibilityHandling, VisibilityPolicy


class TestVisibilityHandling:
    def test_cases(self) -> None:
        assert VisibilityHandling.cases() == [VisibilityHandling.ERROR, VisibilityHandling.IGNORE]

    @pytest.mark.parametrize('value,expected', [
        ('error', VisibilityHandling.ERROR),
        ('IGNORE', VisibilityHandling.IGNORE),
        (VisibilityHandling.IGNORE, VisibilityHandling.IGNORE),
    ])
    def test_from_value(self, value: object, expected: VisibilityHandling) -> None:
        assert VisibilityHandling.from_value(value) is expected

    def test_from_unknown_value_fails(self) -> None:
        with pytest.raises(ValueError):
            VisibilityHandling.from_value('maybe')


class TestVisibilityPolicy:
    """Test the visibility mutation policy."""

    def test_error_handling_raises(self) -> None:
        policy = VisibilityPolicy(VisibilityHandling.ERROR)

        with pytest.raises(UnableToSetVisibility) as excinfo:
            policy.set_visibility('some-file.md', Visibility.PRIVATE)

        assert excinfo.value.location == 'some-file.md'
        assert excinfo.value.reason == 'Azure does not support this operation.'

    def test_ignore_handling_does_nothing(self) -> None:
        VisibilityPolicy(VisibilityHandling.IGNORE).set_visibility('some-file.md', Visibility.PRIVATE)

    def test_requested_public_visibility_is_accepted(self) -> None:
        """Test that asking for the visibility the container serves never fails."""
        policy = VisibilityPolicy(VisibilityHandling.ERROR)

        policy.apply_requested('file.txt', None)
        policy.apply_requested('file.txt', 'public')
        policy.apply_requested('file.txt', Visibility.PUBLIC)

    def test_requested_private_visibility_follows_handling(self) -> None:
        with pytest.raises(UnableToSetVisibility):
            VisibilityPolicy(VisibilityHandling.ERROR).apply_requested('file.txt', 'private')

        VisibilityPolicy(VisibilityHandling.IGNORE).apply_requested('file.txt', 'private')

    def test_policy_accepts_string_handling(self) -> None:
        assert VisibilityPolicy('ignore').handling is VisibilityHandling.IGNORE  # type: ignore[arg-type]
