"""Invoice status transition table

Every status change names the trigger that caused it. A change is legal
only if the (from, to) pair lists that trigger.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple
from src.domain.invoice import InvoiceStatus


class TransitionTrigger(str, Enum):
    """What caused a status transition"""
    SEND = "send"                          # explicit send action
    MANUAL = "manual"                      # explicit status-update call
    PAYMENT = "payment"                    # payment reconciliation reached total
    PAYMENT_REVERSAL = "payment_reversal"  # payment deleted below total
    OVERDUE_SWEEP = "overdue_sweep"        # scheduled due-date sweep


S = InvoiceStatus
T = TransitionTrigger

ALLOWED_TRANSITIONS: Dict[Tuple[InvoiceStatus, InvoiceStatus], FrozenSet[TransitionTrigger]] = {
    (S.DRAFT, S.SENT): frozenset({T.SEND, T.MANUAL}),
    (S.SENT, S.PAID): frozenset({T.PAYMENT}),
    (S.OVERDUE, S.PAID): frozenset({T.PAYMENT}),
    (S.PAID, S.SENT): frozenset({T.PAYMENT_REVERSAL}),
    (S.PAID, S.OVERDUE): frozenset({T.PAYMENT_REVERSAL}),
    (S.SENT, S.OVERDUE): frozenset({T.OVERDUE_SWEEP}),
    (S.DRAFT, S.CANCELLED): frozenset({T.MANUAL}),
    (S.SENT, S.CANCELLED): frozenset({T.MANUAL}),
    (S.OVERDUE, S.CANCELLED): frozenset({T.MANUAL}),
}


def can_transition(
    current: InvoiceStatus, target: InvoiceStatus, trigger: TransitionTrigger
) -> bool:
    return trigger in ALLOWED_TRANSITIONS.get((current, target), frozenset())


def allowed_targets(current: InvoiceStatus, trigger: TransitionTrigger) -> FrozenSet[InvoiceStatus]:
    """Statuses reachable from current through the given trigger"""
    return frozenset(
        target
        for (source, target), triggers in ALLOWED_TRANSITIONS.items()
        if source == current and trigger in triggers
    )
