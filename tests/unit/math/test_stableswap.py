"""Tests for the StableSwap solvers and simulations."""

from fractions import Fraction

import pytest
from structlog.testing import capture_logs

from aex402.math import (
    MathError,
    calc_d,
    calc_d_n,
    calc_lp_tokens,
    calc_price_impact,
    calc_virtual_price,
    calc_withdraw,
    calc_y,
    calc_y_n,
    simulate_swap,
    simulate_swap_detailed,
)
from aex402.math import stableswap
from aex402.safe_int import U64_MAX, S
from tests.helpers import BALANCE, ONE_TOKEN


def invariant_residual(d: int, x: int, y: int, amp: int) -> Fraction:
    """A*4*(x+y) + D - A*4*D - D^3/(4xy), exact. Decreasing in D."""
    ann = 4 * amp
    return ann * (x + y) + d - ann * d - Fraction(d**3, 4 * x * y)


class TestCalcD:
    """Tests for the 2-token invariant."""

    @pytest.mark.parametrize("amp", [1, 100, 100_000])
    def test_empty_pool_is_zero(self, amp):
        """An empty pool has D == 0, as a valid result."""
        result = calc_d(0, 0, amp)
        assert result.is_valid
        assert result.value == 0

    def test_balanced_pool_is_sum(self):
        """Equal balances give D == 2 * balance."""
        result = calc_d(BALANCE, BALANCE, 100)
        assert abs(result.unwrap() - 2 * BALANCE) < 1000
        assert result.unwrap() == 2 * BALANCE

    @pytest.mark.parametrize(
        "x,y,amp",
        [
            (BALANCE, BALANCE, 100),
            (BALANCE, 3 * BALANCE // 10, 100),
            (10**6, 10**9, 100),
            (10**6, 10**9, 1),
            (5 * 10**15, 7 * 10**14, 100_000),
            (123_456_789, 987_654_321, 2_000),
        ],
    )
    def test_satisfies_invariant(self, x, y, amp):
        """The exact root lies within 2 units of the returned D."""
        d = calc_d(x, y, amp).unwrap()
        assert invariant_residual(d - 2, x, y, amp) > 0
        assert invariant_residual(d + 2, x, y, amp) < 0

    def test_imbalance_shrinks_d(self):
        """D is at most the balance sum, strictly less when imbalanced."""
        d = calc_d(BALANCE, BALANCE // 10, 100).unwrap()
        assert d < BALANCE + BALANCE // 10

    def test_one_sided_pool_is_domain_violation(self):
        """A single empty side has no invariant."""
        result = calc_d(BALANCE, 0, 100)
        assert result.error is MathError.DOMAIN_VIOLATION
        assert result.value is None

    def test_iteration_cap_reports_convergence_failure(self, monkeypatch):
        """Running out of iterations is a CONVERGENCE_FAILURE, not a value."""
        monkeypatch.setattr(stableswap, "NEWTON_ITERATIONS", 1)
        with capture_logs() as logs:
            result = calc_d(BALANCE, 10**9, 100)
        assert result.error is MathError.CONVERGENCE_FAILURE
        assert any(log["event"] == "calc_d_did_not_converge" for log in logs)


class TestCalcDN:
    """Tests for the N-token invariant."""

    @pytest.mark.parametrize("n", range(2, 9))
    def test_equal_balances_give_n_times_balance(self, n):
        """D == n * balance for n equal balances."""
        assert calc_d_n([BALANCE] * n, 100).unwrap() == n * BALANCE

    def test_two_tokens_matches_calc_d_for_balanced_pool(self):
        """The 2-token case agrees with calc_d."""
        assert calc_d_n([BALANCE, BALANCE], 100).unwrap() == calc_d(BALANCE, BALANCE, 100).unwrap()

    def test_empty_pool_is_zero(self):
        assert calc_d_n([0, 0, 0], 100).value == 0

    def test_zero_balance_is_domain_violation(self):
        """Any empty balance in a non-empty pool is rejected."""
        result = calc_d_n([BALANCE, 0, BALANCE], 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_imbalanced_pool_below_sum(self):
        """Imbalanced N-token pools have D below the balance sum."""
        balances = [BALANCE, BALANCE // 2, 2 * BALANCE]
        d = calc_d_n(balances, 100).unwrap()
        assert 0 < d < sum(balances)


class TestCalcY:
    """Tests for the 2-token counterparty solver."""

    def test_unchanged_input_returns_output_balance(self):
        """Solving at the current input balance recovers the output balance."""
        d = calc_d(BALANCE, BALANCE, 100).unwrap()
        y = calc_y(BALANCE, d, 100).unwrap()
        assert abs(y - BALANCE) <= 1

    def test_monotonic_decreasing(self):
        """A larger input balance leaves strictly less of the output token."""
        d = calc_d(BALANCE, BALANCE, 100).unwrap()
        ys = [calc_y(BALANCE + k * ONE_TOKEN, d, 100).unwrap() for k in range(1, 6)]
        assert all(a > b for a, b in zip(ys, ys[1:]))

    def test_zero_input_is_domain_violation(self):
        result = calc_y(0, 2 * BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_non_positive_denominator_fails_immediately(self):
        """2y + b - D <= 0 stops the iteration instead of dividing."""
        with capture_logs() as logs:
            result = stableswap._solve_y(S(0), S(0), S(0), "calc_y")
        assert result.error is MathError.CONVERGENCE_FAILURE
        assert result.error_detail == "calc_y: non-positive denominator"
        assert [log["event"] for log in logs] == ["calc_y_non_positive_denominator"]


class TestCalcYN:
    """Tests for the N-token counterparty solver."""

    @pytest.mark.parametrize("n", range(3, 9))
    def test_unchanged_input_returns_output_balance(self, n):
        """With nothing swapped in, the output balance is recovered for n = 3..8."""
        balances = [BALANCE] * n
        d = calc_d_n(balances, 100).unwrap()
        y = calc_y_n(BALANCE, balances, 0, n - 1, d, 100).unwrap()
        assert abs(y - BALANCE) <= 10

    @pytest.mark.parametrize("n", range(3, 9))
    def test_swap_in_drains_output(self, n):
        """Depositing input leaves less output, by close to the deposit near balance."""
        balances = [BALANCE] * n
        d = calc_d_n(balances, 100).unwrap()
        y = calc_y_n(BALANCE + ONE_TOKEN, balances, 1, 2, d, 100).unwrap()
        out = BALANCE - y
        assert out > 0
        assert abs(out - ONE_TOKEN) < ONE_TOKEN // 1000

    def test_two_tokens_matches_calc_y(self):
        """For n == 2 the scaling term reduces to the 2-token formula."""
        d = calc_d(BALANCE, BALANCE, 100).unwrap()
        x_new = BALANCE + 5 * ONE_TOKEN
        assert calc_y_n(x_new, [BALANCE, BALANCE], 0, 1, d, 100) == calc_y(x_new, d, 100)

    def test_same_index_is_domain_violation(self):
        result = calc_y_n(BALANCE, [BALANCE] * 3, 1, 1, 3 * BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    @pytest.mark.parametrize("input_idx,output_idx", [(3, 0), (0, 3), (-1, 0)])
    def test_index_out_of_range_is_domain_violation(self, input_idx, output_idx):
        result = calc_y_n(BALANCE, [BALANCE] * 3, input_idx, output_idx, 3 * BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_zero_balance_is_domain_violation(self):
        """A zero non-output balance would divide by zero."""
        result = calc_y_n(BALANCE, [BALANCE, 0, BALANCE], 0, 2, 3 * BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION


class TestSimulateSwap:
    """Tests for swap simulation."""

    def test_balanced_swap_near_one_to_one(self):
        """A small swap in a balanced pool returns slightly less than it takes."""
        out = simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        assert 0 < out < ONE_TOKEN

    def test_fee_reduces_output(self):
        """Fee-free output beats 30 bps output for the same inputs."""
        no_fee = simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, 0).unwrap()
        with_fee = simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        assert no_fee > with_fee

    def test_higher_amp_gives_better_price(self):
        """A flatter curve pays out more on an imbalanced trade."""
        low = simulate_swap(BALANCE, BALANCE, 100 * ONE_TOKEN, 1, 30).unwrap()
        high = simulate_swap(BALANCE, BALANCE, 100 * ONE_TOKEN, 1000, 30).unwrap()
        assert high > low

    @pytest.mark.parametrize("fee_bps", [-1, 10_001])
    def test_fee_out_of_range_is_domain_violation(self, fee_bps):
        result = simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, fee_bps)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_one_sided_pool_propagates_failure(self):
        """An invariant failure surfaces unchanged, never as zero output."""
        result = simulate_swap(BALANCE, 0, ONE_TOKEN, 100, 30)
        assert result.is_error
        assert result.value is None

    def test_convergence_failure_propagates(self, monkeypatch):
        """A solver running out of iterations fails the whole simulation."""
        monkeypatch.setattr(stableswap, "NEWTON_ITERATIONS", 1)
        result = simulate_swap(BALANCE, 10**9, ONE_TOKEN, 100, 30)
        assert result.error is MathError.CONVERGENCE_FAILURE

    def test_output_beyond_u64_is_domain_violation(self):
        """Outputs the program could not transfer are rejected."""
        with capture_logs() as logs:
            result = simulate_swap(2**70, 2**70, 2**66, 100, 30)
        assert result.error is MathError.DOMAIN_VIOLATION
        assert any(log["event"] == "swap_output_exceeds_u64" for log in logs)


class TestSimulateSwapDetailed:
    """Tests for the detailed swap quote."""

    def test_output_and_fee_sum_to_gross(self):
        """amount_out + fee equals the fee-free output."""
        quote = simulate_swap_detailed(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        gross = simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, 0).unwrap()
        assert quote.amount_out + quote.fee == gross
        assert quote.fee == gross * 30 // 10_000

    def test_matches_simple_simulation(self):
        quote = simulate_swap_detailed(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        assert quote.amount_out == simulate_swap(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()

    def test_price_impact_includes_fee(self):
        """On a deep balanced pool the impact is almost entirely the fee."""
        quote = simulate_swap_detailed(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        assert 0.0029 < quote.price_impact < 0.0031

    def test_empty_side_is_domain_violation(self):
        result = simulate_swap_detailed(0, BALANCE, ONE_TOKEN, 100, 30)
        assert result.error is MathError.DOMAIN_VIOLATION


class TestCalcPriceImpact:
    """Tests for the simplified price impact."""

    def test_balanced_pool(self):
        impact = calc_price_impact(BALANCE, BALANCE, ONE_TOKEN, 100, 30).unwrap()
        assert 0.0029 < impact < 0.0031

    def test_larger_trade_has_larger_impact(self):
        small = calc_price_impact(BALANCE, BALANCE, ONE_TOKEN, 10, 30).unwrap()
        large = calc_price_impact(BALANCE, BALANCE, 300 * ONE_TOKEN, 10, 30).unwrap()
        assert large > small

    def test_failure_propagates(self):
        result = calc_price_impact(BALANCE, 0, ONE_TOKEN, 100, 30)
        assert result.error is MathError.DOMAIN_VIOLATION


class TestCalcLpTokens:
    """Tests for LP minting."""

    @pytest.mark.parametrize("amount", [1, 4, ONE_TOKEN, BALANCE])
    def test_initial_deposit_is_geometric_mean(self, amount):
        """Equal first deposits mint exactly the deposit amount."""
        assert calc_lp_tokens(amount, amount, 0, 0, 0, 100).unwrap() == amount

    def test_initial_deposit_uneven(self):
        assert calc_lp_tokens(4 * ONE_TOKEN, ONE_TOKEN, 0, 0, 0, 100).unwrap() == 2 * ONE_TOKEN

    def test_initial_deposit_rounding_to_zero_is_domain_violation(self):
        """A non-empty first deposit that mints nothing is rejected."""
        result = calc_lp_tokens(ONE_TOKEN, 0, 0, 0, 0, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_proportional_deposit(self):
        """A balanced deposit mints supply * deposit / balance."""
        minted = calc_lp_tokens(ONE_TOKEN, ONE_TOKEN, BALANCE, BALANCE, 2 * BALANCE, 100)
        assert minted.unwrap() == 2 * ONE_TOKEN

    def test_one_sided_deposit_mints_less(self):
        """Imbalancing deposits mint less than the same value deposited evenly."""
        even = calc_lp_tokens(ONE_TOKEN, ONE_TOKEN, BALANCE, BALANCE, 2 * BALANCE, 100).unwrap()
        one_sided = calc_lp_tokens(2 * ONE_TOKEN, 0, BALANCE, BALANCE, 2 * BALANCE, 100).unwrap()
        assert 0 < one_sided < even

    def test_zero_invariant_is_domain_violation(self):
        """Minting against an empty pool with outstanding supply fails."""
        result = calc_lp_tokens(ONE_TOKEN, ONE_TOKEN, 0, 0, BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_initial_mint_beyond_u64_is_domain_violation(self):
        result = calc_lp_tokens(2**64, 2**64, 0, 0, 0, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_mint_beyond_u64_is_domain_violation(self):
        """Tripling a pool with a near-max supply would mint 2 * U64_MAX."""
        result = calc_lp_tokens(2 * BALANCE, 2 * BALANCE, BALANCE, BALANCE, U64_MAX, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_mint_at_u64_max_is_allowed(self):
        minted = calc_lp_tokens(BALANCE, BALANCE, BALANCE, BALANCE, U64_MAX, 100)
        assert minted.unwrap() == U64_MAX


class TestCalcWithdraw:
    """Tests for proportional withdrawals."""

    def test_proportional(self):
        result = calc_withdraw(10**11, 10**12, 2 * 10**12, 10**12)
        assert result.unwrap() == (10**11, 2 * 10**11)

    def test_full_withdrawal(self):
        assert calc_withdraw(BALANCE, 7, 9, BALANCE).unwrap() == (7, 9)

    def test_zero_supply_is_domain_violation(self):
        result = calc_withdraw(1, BALANCE, BALANCE, 0)
        assert result.error is MathError.DOMAIN_VIOLATION


class TestCalcVirtualPrice:
    """Tests for LP virtual price."""

    def test_fresh_pool_is_one(self):
        """D equal to LP supply prices the LP token at exactly 1e18."""
        assert calc_virtual_price(BALANCE, BALANCE, 2 * BALANCE, 100).unwrap() == 10**18

    def test_zero_supply_is_domain_violation(self):
        result = calc_virtual_price(BALANCE, BALANCE, 0, 100)
        assert result.error is MathError.DOMAIN_VIOLATION

    def test_invariant_failure_propagates(self):
        result = calc_virtual_price(BALANCE, 0, BALANCE, 100)
        assert result.error is MathError.DOMAIN_VIOLATION
