"""
Settlement service for even-split balance calculation.

Everything here is a pure function over in-memory snapshots: callers fetch
members and expenses, convert the rows with ``members_from_rows`` and
``expenses_from_rows``, then call ``compute_settlement``. Nothing is cached,
so the result always reflects exactly the snapshot passed in.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Sequence

from tripmate.core.errors import ErrorCode, ValidationError
from tripmate.core.utils import quantize_money

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


@dataclass(frozen=True)
class Member:
    """A participant in a trip."""
    user_id: Any
    display_name: str


@dataclass(frozen=True)
class ExpenseRecord:
    """A single payment fronted by ``payer_id``."""
    payer_id: Any
    amount: Decimal

    def __post_init__(self):
        object.__setattr__(self, "amount", to_money(self.amount))


@dataclass(frozen=True)
class Balance:
    """Derived ledger entry for one member."""
    user_id: Any
    display_name: str
    paid: Decimal
    share: Decimal
    balance: Decimal  # positive = is owed money, negative = owes money


@dataclass(frozen=True)
class Settlement:
    """Result of a settlement calculation."""
    balances: List[Balance]
    total_cost: Decimal

    @property
    def member_count(self) -> int:
        return len(self.balances)

    @property
    def average_share(self) -> Decimal:
        return self.total_cost / max(self.member_count, 1)


@dataclass(frozen=True)
class Transfer:
    """A suggested payment from a debtor to a creditor."""
    from_user_id: Any
    to_user_id: Any
    amount: Decimal


def to_money(value: Any) -> Decimal:
    """
    Coerce a raw amount into a finite, non-negative Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") rather than
    its binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid amount: {value!r}", code=ErrorCode.INVALID_AMOUNT)
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}", code=ErrorCode.INVALID_AMOUNT)
    if not amount.is_finite():
        raise ValidationError(f"Amount must be finite, got {amount}", code=ErrorCode.INVALID_AMOUNT)
    if amount < 0:
        raise ValidationError(f"Amount must not be negative, got {amount}", code=ErrorCode.INVALID_AMOUNT)
    return amount


def members_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[Member]:
    """Convert untyped member rows (``user_id`` plus ``display_name`` or ``username``)."""
    members = []
    for row in rows:
        if row.get("user_id") is None:
            raise ValidationError(f"Member row without user_id: {dict(row)!r}")
        name = row.get("display_name") or row.get("username") or "Unknown"
        members.append(Member(user_id=row["user_id"], display_name=str(name)))
    return members


def expenses_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[ExpenseRecord]:
    """Convert untyped expense rows (``payer_id`` and ``amount``)."""
    expenses = []
    for row in rows:
        if row.get("payer_id") is None:
            raise ValidationError(f"Expense row without payer_id: {dict(row)!r}")
        expenses.append(ExpenseRecord(payer_id=row["payer_id"], amount=row.get("amount")))
    return expenses


def compute_settlement(members: Sequence[Member], expenses: Sequence[ExpenseRecord]) -> Settlement:
    """
    Split the total cost evenly across members and rank their balances.

    Expenses paid by someone outside ``members`` still count towards the
    total (and so every share) but are credited to nobody, so the balances
    then sum to minus the orphaned amount instead of zero.

    Raises ValidationError on duplicate member ids. Amounts are validated
    when each ExpenseRecord is built.
    """
    seen = set()
    for member in members:
        if member.user_id in seen:
            raise ValidationError(
                f"Duplicate member user_id: {member.user_id!r}", code=ErrorCode.DUPLICATE_MEMBER
            )
        seen.add(member.user_id)

    amounts = [expense.amount for expense in expenses]
    total_cost = sum(amounts, ZERO)
    share = total_cost / max(len(members), 1)

    paid = {member.user_id: ZERO for member in members}
    orphaned = ZERO
    for expense, amount in zip(expenses, amounts):
        if expense.payer_id in paid:
            paid[expense.payer_id] += amount
        else:
            orphaned += amount

    if orphaned:
        logger.warning(f"Expenses totalling {orphaned} were paid by non-members and are shared unattributed")

    balances = [
        Balance(
            user_id=member.user_id,
            display_name=member.display_name,
            paid=paid[member.user_id],
            share=share,
            balance=paid[member.user_id] - share
        )
        for member in members
    ]
    # sorted() is stable with reverse=True, so ties keep member order
    balances = sorted(balances, key=lambda b: b.balance, reverse=True)

    logger.debug(f"Settled {len(expenses)} expenses across {len(members)} members: total={total_cost}")
    return Settlement(balances=balances, total_cost=total_cost)


def suggest_transfers(balances: Sequence[Balance]) -> List[Transfer]:
    """
    Suggest payments that settle the ledger.
    Greedy: the largest debtor pays the largest creditor until one side runs out.
    """
    creditors = [[b.user_id, b.balance] for b in balances if b.balance > 0]
    debtors = [[b.user_id, -b.balance] for b in balances if b.balance < 0]

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor = creditors[cred_idx]
        debtor = debtors[debt_idx]

        amount = min(creditor[1], debtor[1])
        transfers.append(Transfer(from_user_id=debtor[0], to_user_id=creditor[0], amount=amount))

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] == 0:
            cred_idx += 1
        if debtor[1] == 0:
            debt_idx += 1

    return transfers


def format_summary(settlement: Settlement, currency: str) -> str:
    """Render a plain-text summary of a settlement."""
    lines = [
        f"Total expenses: {quantize_money(settlement.total_cost)} {currency}",
        f"Members: {settlement.member_count}",
        f"Average share: {quantize_money(settlement.average_share)} {currency}",
        "",
        "Balances:",
    ]
    for b in settlement.balances:
        sign = "+" if b.balance >= 0 else ""
        lines.append(f"  {b.display_name}: {sign}{quantize_money(b.balance)} {currency}")
    return "\n".join(lines)
