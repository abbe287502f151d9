"""Tests for helpers on decoded account records."""

import pytest

from tests.helpers import make_lottery_entry


class TestLotteryEntry:
    """Ticket ranges are [ticket_start, ticket_start + ticket_count)."""

    @pytest.mark.parametrize("ticket", [100, 112, 124])
    def test_holds_tickets_in_range(self, ticket):
        assert make_lottery_entry().holds(ticket)

    @pytest.mark.parametrize("ticket", [0, 99, 125, 10**9])
    def test_does_not_hold_tickets_outside_range(self, ticket):
        assert not make_lottery_entry().holds(ticket)

    def test_empty_entry_holds_nothing(self):
        assert not make_lottery_entry(ticket_count=0).holds(100)
