"""
Balance Ledger
==============

Turns a room's unsettled expenses into a net "who owes whom" sheet.

The ledger is a pure function over in-memory snapshots: it never touches
the database, so callers load roommates and expenses first (see
``balances.get_room_balances``) and the functions here can be exercised
without any backend.

Algorithm:
    1. Start a zeroed accumulator ``raw[a][b]`` for every ordered pair of
       distinct roommates.
    2. For each unsettled expense with at least one sharer, every sharer
       other than the payer owes ``amount / len(shared_with)``:
       ``raw[debtor][payer] += share`` and ``raw[payer][debtor] -= share``.
    3. Keep only positive entries, rounded to cents. Because step 2 is
       antisymmetric, ``raw[a][b] == -raw[b][a]`` and at most one direction
       per pair survives.

Example::

    >>> from decimal import Decimal
    >>> calculate_balances(
    ...     ['a', 'b', 'c'],
    ...     [ExpenseSnapshot(id=1, amount=Decimal('30'), paid_by='a',
    ...                      shared_with=('a', 'b', 'c'))],
    ... )
    {'a': {}, 'b': {'a': Decimal('10.00')}, 'c': {'a': Decimal('10.00')}}
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Hashable, Iterable, NamedTuple, Tuple

from .exceptions import ReferentialError, InvalidExpenseAmountError

logger = logging.getLogger(__name__)

CURRENCY_QUANTUM = Decimal('0.01')
ZERO = Decimal('0')

Balances = Dict[Hashable, Dict[Hashable, Decimal]]


class ExpenseSnapshot(NamedTuple):
    """Read-only view of an expense, all the ledger needs."""

    id: Hashable
    amount: Decimal
    paid_by: Hashable
    shared_with: Tuple[Hashable, ...]
    settled: bool = False


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise in
    return Decimal(str(value))


def round_currency(amount: Decimal) -> Decimal:
    return amount.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def _unique(ids: Iterable[Hashable]) -> list:
    # Order-preserving de-duplication
    return list(dict.fromkeys(ids))


def _validate(expense: ExpenseSnapshot, known: set, sharers: list) -> Decimal:
    unknown = _unique(
        rid for rid in [expense.paid_by, *sharers] if rid not in known
    )
    if unknown:
        raise ReferentialError(expense.id, unknown)

    amount = to_decimal(expense.amount)
    if amount <= ZERO:
        raise InvalidExpenseAmountError(
            f"Expense {expense.id} has a non-positive amount: {amount}"
        )
    return amount


def accumulate_raw_balances(
    roommate_ids: Iterable[Hashable],
    expenses: Iterable[ExpenseSnapshot]
) -> Balances:
    """
    Build the full pairwise accumulator (steps 1 and 2), unrounded.

    Every ordered pair of distinct roommates is present, including zero
    and negative entries. Amounts keep full Decimal precision.

    Args:
        roommate_ids: Identifiers of the room's roommates.
        expenses: Expense snapshots; settled ones are ignored.

    Returns:
        dict: ``raw[debtor][creditor]`` -> signed Decimal.

    Raises:
        ReferentialError: If an unsettled expense names a payer or sharer
            not in ``roommate_ids``.
        InvalidExpenseAmountError: If an unsettled expense amount is <= 0.
    """
    ids = _unique(roommate_ids)
    known = set(ids)

    raw = {a: {b: ZERO for b in ids if b != a} for a in ids}

    for expense in expenses:
        if expense.settled:
            continue

        sharers = _unique(expense.shared_with)
        amount = _validate(expense, known, sharers)

        if not sharers:
            continue

        payer = expense.paid_by
        share = amount / len(sharers)

        for debtor in sharers:
            # The payer's own portion is already paid by them
            if debtor == payer:
                continue
            raw[debtor][payer] += share
            raw[payer][debtor] -= share

    return raw


def simplify_balances(raw: Balances) -> Balances:
    """
    Keep only positive debts, rounded to cents (step 3).

    Every debtor key from ``raw`` is kept; someone who owes nothing maps to
    an empty dict. Entries that round to 0.00 are dropped.
    """
    simplified = {}

    for debtor, row in raw.items():
        simplified[debtor] = {}
        for creditor, amount in row.items():
            if amount <= ZERO:
                continue
            rounded = round_currency(amount)
            if rounded > ZERO:
                simplified[debtor][creditor] = rounded

    return simplified


def calculate_balances(
    roommate_ids: Iterable[Hashable],
    expenses: Iterable[ExpenseSnapshot]
) -> Balances:
    """
    Compute the net debt sheet for a room.

    Pure and idempotent: the same roommates and expenses always produce the
    same mapping.

    Returns:
        dict: ``balances[debtor][creditor]`` -> positive Decimal with two
        decimal places. Every roommate appears as a key.

    Raises:
        ReferentialError: See :func:`accumulate_raw_balances`.
        InvalidExpenseAmountError: See :func:`accumulate_raw_balances`.
    """
    expenses = list(expenses)
    balances = simplify_balances(accumulate_raw_balances(roommate_ids, expenses))

    logger.debug(
        "Computed balances for %d roommates from %d expenses",
        len(balances),
        len(expenses),
    )
    return balances


def total_owed_by(balances: Balances, roommate_id: Hashable) -> Decimal:
    """Sum of everything ``roommate_id`` owes others."""
    return sum(balances.get(roommate_id, {}).values(), Decimal('0.00'))


def total_owed_to(balances: Balances, roommate_id: Hashable) -> Decimal:
    """Sum of everything others owe ``roommate_id``."""
    return sum(
        (row[roommate_id] for row in balances.values() if roommate_id in row),
        Decimal('0.00'),
    )
