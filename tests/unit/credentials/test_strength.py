"""Unit tests for password strength scoring."""

import pytest

from registrar.credentials import score_strength


@pytest.mark.unit
class TestScoreStrength:
    """Tests for score_strength function."""

    def test_empty_password(self) -> None:
        """An empty password is invalid with a single hint."""
        result = score_strength("")

        assert result.valid is False
        assert result.score == 0
        assert result.feedback == ["Password is required"]

    def test_strong_password(self) -> None:
        """A long mixed password with no weak patterns scores 6."""
        result = score_strength("Tr0ub4dor&3xy")

        assert result.valid is True
        assert result.score == 6
        assert result.feedback == ["Strong password!"]

    def test_common_pattern_penalized(self) -> None:
        """Common patterns cost two points but can still pass."""
        result = score_strength("StrongPassword123!")

        assert result.valid is True
        assert result.score == 4
        assert "Avoid common patterns" in result.feedback
        assert "Strong password!" not in result.feedback

    def test_repeats_penalized(self) -> None:
        """Three identical characters in a row cost one point."""
        result = score_strength("Xyzzz9!Qrstu")

        assert result.score == 5
        assert "Avoid repeating characters" in result.feedback

    def test_missing_criteria_listed(self) -> None:
        """Each missing criterion produces a hint."""
        result = score_strength("lowercaseonly")

        assert result.valid is False
        assert "Include uppercase letters" in result.feedback
        assert "Include numbers" in result.feedback
        assert "Include special characters" in result.feedback

    def test_short_password_never_valid(self) -> None:
        """Under 8 characters is invalid even with every character class."""
        result = score_strength("Ab1!")

        assert result.score == 4
        assert result.valid is False
        assert "Password must be at least 8 characters long" in result.feedback

    def test_score_clamped_at_zero(self) -> None:
        """Penalties never push the reported score below zero."""
        result = score_strength("abc")

        assert result.score == 0
        assert result.valid is False

    @pytest.mark.parametrize(
        "password",
        ["password", "admin123", "qwertyui", "Abcdefgh"],
    )
    def test_weak_passwords_rejected(self, password: str) -> None:
        """Dictionary-style passwords do not reach the valid threshold."""
        assert score_strength(password).valid is False

    @pytest.mark.parametrize(
        "password",
        ["Tr0ub4dor&3xy", "Xyzzz9!Qrstu", "StrongPassword123!", "a", "!!!!!!!!!!!!!!"],
    )
    def test_score_within_bounds(self, password: str) -> None:
        """Scores always fall between 0 and 6."""
        assert 0 <= score_strength(password).score <= 6
