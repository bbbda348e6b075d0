"""
Room balance service.

Loads a room's approved roommates and unsettled expenses and feeds them
to the pure ledger. Nothing is cached: each call reflects the current
rows.
"""

from typing import List
from uuid import UUID

from apps.expenses.models import Expense
from apps.rooms.models import Room, Roommate, RoommateStatus
from apps.rooms.services.exceptions import RoomNotFoundError

from .balance_ledger import (
    Balances,
    ExpenseSnapshot,
    calculate_balances,
    total_owed_by,
    total_owed_to,
)


def snapshot_expense(expense: Expense) -> ExpenseSnapshot:
    return ExpenseSnapshot(
        id=expense.id,
        amount=expense.amount,
        paid_by=expense.paid_by_id,
        shared_with=tuple(expense.get_sharer_ids()),
        settled=expense.settled,
    )


def _approved_roommates(room_id: UUID) -> List[Roommate]:
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    return list(
        Roommate.objects
        .filter(room_id=room_id, status=RoommateStatus.APPROVED)
        .order_by('-is_owner', 'joined_at')
    )


def _balances_for(roommates: List[Roommate], room_id: UUID) -> Balances:
    expenses = (
        Expense.objects
        .filter(room_id=room_id, settled=False)
        .prefetch_related('shares')
    )
    return calculate_balances(
        [r.id for r in roommates],
        [snapshot_expense(e) for e in expenses],
    )


def get_room_balances(*, room_id: UUID) -> Balances:
    """
    Compute who owes whom in a room from its unsettled expenses.

    Raises:
        RoomNotFoundError: If room doesn't exist
        ReferentialError: If stored expenses reference non-roommates
        InvalidExpenseAmountError: If a stored amount is not positive
    """
    roommates = _approved_roommates(room_id)
    return _balances_for(roommates, room_id)


def get_balance_summary(*, room_id: UUID) -> dict:
    """
    Balances plus presentation helpers.

    Returns:
        dict: A dictionary containing:
            - balances: debtor -> creditor -> amount
            - totals: per roommate ``owes`` and ``is_owed``
            - lines: one entry per debt, for "X owes Y: amount" rendering
    """
    roommates = _approved_roommates(room_id)
    balances = _balances_for(roommates, room_id)
    names = {r.id: r.name for r in roommates}

    totals = [
        {
            'roommate_id': r.id,
            'name': r.name,
            'owes': total_owed_by(balances, r.id),
            'is_owed': total_owed_to(balances, r.id),
        }
        for r in roommates
    ]

    lines = [
        {
            'debtor_id': debtor,
            'debtor_name': names[debtor],
            'creditor_id': creditor,
            'creditor_name': names[creditor],
            'amount': amount,
        }
        for debtor, row in balances.items()
        for creditor, amount in row.items()
    ]

    return {
        'balances': balances,
        'totals': totals,
        'lines': lines,
    }
