"""Mini README: Derived ledger metrics for dashboards and exports.

Structure:
    * ItemAnalytics - chart-ready record for a single expense.
    * AnalyticsRecord - totals, usage ratio, remaining budget and items.
    * budget_share - unrounded percentage of the budget used by an amount.
    * compute_analytics - pure, memoised derivation from a LedgerSnapshot.

Everything here is a function of the snapshot alone. A budget of zero means
"no budget set": ratios and shares are reported as 0 in that case. An empty
ledger yields a single placeholder item so proportional charts always have
one drawable slice. Overflowing amounts yield infinite metrics, which
``as_dict`` reports as ``None`` so payloads stay valid JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Tuple

from .colors import color_for
from .formatting import json_number, round_to
from ..ledger import LedgerSnapshot
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

PLACEHOLDER_NAME = "EMPTY"
PLACEHOLDER_COLOR = "#18181B"


@dataclass(frozen=True, slots=True)
class ItemAnalytics:
    """Per-expense values used by charts and legends."""

    name: str
    amount: float
    color: str
    budget_share_percent: float
    placeholder: bool = False

    @property
    def value(self) -> float:
        """Slice weight for proportional charts."""

        return self.amount

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "amount": json_number(self.amount),
            "color": self.color,
            "budget_share_percent": json_number(self.budget_share_percent),
            "placeholder": self.placeholder,
        }


@dataclass(frozen=True, slots=True)
class AnalyticsRecord:
    """Aggregate metrics for one snapshot."""

    total: float
    budget: float
    usage_ratio: float
    safe_to_spend: float
    per_item: Tuple[ItemAnalytics, ...]

    @property
    def is_over_budget(self) -> bool:
        return self.total > self.budget

    @property
    def usage_percent(self) -> float:
        """Usage ratio as a percentage with one decimal, as shown on the meter."""

        return round_to(self.usage_ratio * 100, 1)

    @property
    def meter_fill_percent(self) -> float:
        """Progress bar fill, capped at a full bar."""

        return min(self.usage_ratio * 100, 100.0)

    def as_dict(self) -> Dict[str, object]:
        return {
            "total": json_number(self.total),
            "budget": json_number(self.budget),
            "usage_ratio": json_number(self.usage_ratio),
            "usage_percent": json_number(self.usage_percent),
            "safe_to_spend": json_number(self.safe_to_spend),
            "is_over_budget": self.is_over_budget,
            "per_item": [item.as_dict() for item in self.per_item],
        }


def budget_share(amount: float, budget: float) -> float:
    """Percentage of ``budget`` consumed by ``amount``; 0 without a budget."""

    if budget > 0:
        return amount / budget * 100
    return 0.0


def _placeholder_item() -> ItemAnalytics:
    return ItemAnalytics(
        name=PLACEHOLDER_NAME,
        amount=1.0,
        color=PLACEHOLDER_COLOR,
        budget_share_percent=0.0,
        placeholder=True,
    )


@lru_cache(maxsize=128)
def compute_analytics(snapshot: LedgerSnapshot) -> AnalyticsRecord:
    """Derive totals and per-item records for ``snapshot``."""

    budget = snapshot.budget
    total = float(sum(expense.amount for expense in snapshot.expenses))
    usage_ratio = total / budget if budget > 0 else 0.0
    if snapshot.expenses:
        per_item = tuple(
            ItemAnalytics(
                name=expense.name,
                amount=expense.amount,
                color=color_for(expense.name),
                budget_share_percent=round_to(budget_share(expense.amount, budget), 1),
            )
            for expense in snapshot.expenses
        )
    else:
        per_item = (_placeholder_item(),)
    LOGGER.debug(
        "Computed analytics: total=%s budget=%s ratio=%.4f items=%s",
        total,
        budget,
        usage_ratio,
        len(snapshot.expenses),
    )
    return AnalyticsRecord(
        total=total,
        budget=budget,
        usage_ratio=usage_ratio,
        safe_to_spend=budget - total,
        per_item=per_item,
    )
