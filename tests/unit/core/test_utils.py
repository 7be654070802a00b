"""Tests for unit conversion and display helpers."""

import pytest

from soltools.core.utils import LAMPORTS_PER_SOL, format_sol, lamports_to_sol, truncate_address


class TestLamportsToSol:
    """Tests for lamports_to_sol()."""

    @pytest.mark.unit
    def test_one_sol(self) -> None:
        assert lamports_to_sol(1_000_000_000) == 1.0

    @pytest.mark.unit
    def test_negative_half_sol(self) -> None:
        assert lamports_to_sol(-500_000_000) == -0.5

    @pytest.mark.unit
    @pytest.mark.parametrize("lamports", [0, 1, -1, 5000, 123_456_789_012, -987_654_321])
    def test_matches_float_division(self, lamports: int) -> None:
        assert lamports_to_sol(lamports) == lamports / 1_000_000_000.0

    @pytest.mark.unit
    def test_constant(self) -> None:
        assert LAMPORTS_PER_SOL == 1_000_000_000


class TestFormatSol:
    """Tests for format_sol()."""

    @pytest.mark.unit
    def test_positive_has_plus_sign(self) -> None:
        assert format_sol(2_500_000_000) == "+2.500000000 SOL"

    @pytest.mark.unit
    def test_negative(self) -> None:
        assert format_sol(-5000) == "-0.000005000 SOL"

    @pytest.mark.unit
    def test_zero(self) -> None:
        assert format_sol(0) == "0.000000000 SOL"


class TestTruncateAddress:
    """Tests for truncate_address()."""

    @pytest.mark.unit
    def test_long_address(self) -> None:
        assert truncate_address("9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM") == "9WzD...AWWM"

    @pytest.mark.unit
    def test_short_value_unchanged(self) -> None:
        assert truncate_address("sig-0001") == "sig-0001"
