"""
Settlement report: ledger -> balances -> transfers for one trip.

Nothing here is stored. Every call re-reads members and expenses and
recomputes from scratch.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence
from uuid import UUID

from apps.trips.services import get_trip_by_id

from .balance_calculation import MemberBalance, calculate_balances
from .ledger import LedgerEntry, LedgerMember, load_ledger, load_members
from .settlement_optimizer import Transfer, suggest_settlements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementReport:
    members: List[LedgerMember] = field(default_factory=list)
    balances: List[MemberBalance] = field(default_factory=list)
    settlements: List[Transfer] = field(default_factory=list)
    total_expenses: int = 0


def build_settlement_report(
    members: Sequence[LedgerMember],
    entries: Sequence[LedgerEntry]
) -> SettlementReport:
    """Compute the report from explicit inputs. No members, empty report."""
    if not members:
        return SettlementReport()

    balances = calculate_balances(members, entries)
    return SettlementReport(
        members=list(members),
        balances=balances,
        settlements=suggest_settlements(balances),
        total_expenses=sum(entry.amount for entry in entries),
    )


def get_settlement_report(*, trip_id: UUID) -> SettlementReport:
    """
    Settlement report for a trip.

    Raises:
        TripNotFoundError: If trip doesn't exist
        ExpensesServiceError subclasses: If stored expenses break ledger rules
    """
    get_trip_by_id(trip_id=trip_id)

    members = load_members(trip_id=trip_id)
    if not members:
        return SettlementReport()

    entries = load_ledger(trip_id=trip_id, members=members)
    logger.debug(
        "Computing settlement for trip %s: %d members, %d expenses",
        trip_id, len(members), len(entries)
    )
    return build_settlement_report(members, entries)
