"""Tests for instruction argument validation."""

import pytest
from pydantic import ValidationError

from aex402.instructions import (
    CreateNPoolArgs,
    CreatePoolArgs,
    GetTwapArgs,
    RampAmpArgs,
    SetPauseArgs,
    SwapArgs,
    SwapNArgs,
    TwapWindow,
    UpdateFeeArgs,
)
from aex402.safe_int import I64_MIN, U64_MAX


class TestIntegerWidths:
    """Arguments must fit their on-chain field."""

    def test_u64_bounds(self):
        SwapArgs(from_token=0, to_token=1, amount_in=U64_MAX, min_out=0, deadline=0)
        with pytest.raises(ValidationError):
            SwapArgs(from_token=0, to_token=1, amount_in=U64_MAX + 1, min_out=0, deadline=0)
        with pytest.raises(ValidationError):
            SwapArgs(from_token=0, to_token=1, amount_in=-1, min_out=0, deadline=0)

    def test_i64_accepts_negative(self):
        args = RampAmpArgs(target_amp=200, duration=I64_MIN)
        assert args.duration == I64_MIN

    def test_u8_bounds(self):
        CreatePoolArgs(amp=100, bump=255)
        with pytest.raises(ValidationError):
            CreatePoolArgs(amp=100, bump=256)


class TestProtocolRanges:
    """Narrower ranges enforced by the program."""

    @pytest.mark.parametrize("amp", [0, 100_001])
    def test_amp_out_of_range(self, amp):
        with pytest.raises(ValidationError):
            CreatePoolArgs(amp=amp, bump=1)

    def test_fee_bps_range(self):
        assert UpdateFeeArgs(fee_bps=10_000).fee_bps == 10_000
        with pytest.raises(ValidationError):
            UpdateFeeArgs(fee_bps=10_001)

    def test_swap_token_index_two_token_pool(self):
        with pytest.raises(ValidationError):
            SwapArgs(from_token=2, to_token=0, amount_in=1, min_out=0, deadline=0)

    def test_swap_n_index_below_max_tokens(self):
        SwapNArgs(from_idx=7, to_idx=0, amount_in=1, min_out=0)
        with pytest.raises(ValidationError):
            SwapNArgs(from_idx=8, to_idx=0, amount_in=1, min_out=0)

    @pytest.mark.parametrize("n_tokens", [1, 9])
    def test_npool_token_count(self, n_tokens):
        with pytest.raises(ValidationError):
            CreateNPoolArgs(amp=100, n_tokens=n_tokens, bump=1)


class TestStrictness:
    """No silent coercion."""

    def test_string_rejected(self):
        with pytest.raises(ValidationError):
            CreatePoolArgs(amp="100", bump=1)  # type: ignore[arg-type]

    def test_bool_rejected_for_int(self):
        with pytest.raises(ValidationError):
            CreatePoolArgs(amp=100, bump=True)

    def test_int_rejected_for_bool(self):
        with pytest.raises(ValidationError):
            SetPauseArgs(paused=1)  # type: ignore[arg-type]

    def test_extra_field_rejected(self):
        with pytest.raises(ValidationError):
            UpdateFeeArgs(fee_bps=30, admin_fee_pct=50)  # type: ignore[call-arg]

    def test_frozen(self):
        args = UpdateFeeArgs(fee_bps=30)
        with pytest.raises(ValidationError):
            args.fee_bps = 40  # type: ignore[misc]

    def test_twap_window_enum(self):
        assert GetTwapArgs(window=TwapWindow.DAY_7).window is TwapWindow.DAY_7
        with pytest.raises(ValidationError):
            GetTwapArgs(window=7)  # type: ignore[arg-type]
