"""Unit tests for the invoice status transition table"""

import pytest

from src.domain.invoice import InvoiceStatus as S
from src.domain.invoice_status import TransitionTrigger as T, allowed_targets, can_transition
from tests.fixtures.factories import make_invoice


class TestTransitionTable:

    @pytest.mark.parametrize(
        "current,target,trigger",
        [
            (S.DRAFT, S.SENT, T.SEND),
            (S.DRAFT, S.SENT, T.MANUAL),
            (S.SENT, S.PAID, T.PAYMENT),
            (S.OVERDUE, S.PAID, T.PAYMENT),
            (S.PAID, S.SENT, T.PAYMENT_REVERSAL),
            (S.PAID, S.OVERDUE, T.PAYMENT_REVERSAL),
            (S.SENT, S.OVERDUE, T.OVERDUE_SWEEP),
            (S.DRAFT, S.CANCELLED, T.MANUAL),
            (S.SENT, S.CANCELLED, T.MANUAL),
            (S.OVERDUE, S.CANCELLED, T.MANUAL),
        ],
    )
    def test_allowed(self, current, target, trigger):
        assert can_transition(current, target, trigger)

    @pytest.mark.parametrize(
        "current,target,trigger",
        [
            # paid and overdue are never set by hand
            (S.SENT, S.PAID, T.MANUAL),
            (S.SENT, S.OVERDUE, T.MANUAL),
            # draft cannot be paid or swept
            (S.DRAFT, S.PAID, T.PAYMENT),
            (S.DRAFT, S.OVERDUE, T.OVERDUE_SWEEP),
            # overdue is not swept twice
            (S.OVERDUE, S.OVERDUE, T.OVERDUE_SWEEP),
            # cancelled is terminal
            (S.CANCELLED, S.DRAFT, T.MANUAL),
            (S.CANCELLED, S.SENT, T.MANUAL),
            (S.CANCELLED, S.PAID, T.PAYMENT),
            # no way back to draft
            (S.SENT, S.DRAFT, T.MANUAL),
            # paid invoices are reversed through payments, not cancelled
            (S.PAID, S.CANCELLED, T.MANUAL),
        ],
    )
    def test_rejected(self, current, target, trigger):
        assert not can_transition(current, target, trigger)

    def test_cancelled_has_no_exits(self):
        for trigger in T:
            assert allowed_targets(S.CANCELLED, trigger) == frozenset()

    def test_reversal_targets(self):
        assert allowed_targets(S.PAID, T.PAYMENT_REVERSAL) == frozenset({S.SENT, S.OVERDUE})


class TestInvoiceGuards:

    def test_only_draft_is_editable(self):
        for status in S:
            assert make_invoice(status=status).is_editable == (status == S.DRAFT)

    def test_draft_and_cancelled_are_deletable(self):
        deletable = {s for s in S if make_invoice(status=s).is_deletable}
        assert deletable == {S.DRAFT, S.CANCELLED}

    def test_payments_only_on_issued_invoices(self):
        accepting = {s for s in S if make_invoice(status=s).accepts_payments}
        assert accepting == {S.SENT, S.OVERDUE, S.PAID}
