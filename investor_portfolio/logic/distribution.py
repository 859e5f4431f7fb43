"""Segment distributions over the per-company positions of each deal.

Every view is built from the same :class:`DealMetrics` list the portfolio
totals come from. Deals with no resolved company contribute a single
``Unknown`` row so that the groups always add back up to the portfolio total.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional
import pandas as pd
from .decimals import ZERO, return_percent, share_percent
from .deal_metrics import DealMetrics

UNKNOWN = "Unknown"
SEGMENT_KEYS = ("company_name", "sector")

@dataclass
class Contribution:
    company_name: Optional[str]
    sector: Optional[str]
    transaction_month: str
    invested_amount: Decimal
    current_value: Decimal

@dataclass
class SegmentShare:
    key: str
    amount: Decimal
    percentage: Decimal

@dataclass
class MonthlyReturn:
    month: str
    invested: Decimal
    current_value: Decimal
    percentage: Decimal
    return_percent: Decimal

@dataclass
class ProfitShare:
    key: str
    profit: Decimal
    percentage: Decimal

def month_key(value) -> str:
    if value is None:
        return UNKNOWN
    return str(pd.Period(value, freq="M"))

def iter_contributions(metrics: Iterable[DealMetrics]) -> Iterator[Contribution]:
    for deal in metrics:
        month = month_key(deal.transaction_date)
        if not deal.resolved:
            yield Contribution(None, None, month, deal.invested_amount, deal.current_value)
            continue
        for position in deal.companies:
            yield Contribution(
                position.company_name,
                position.sector,
                month,
                position.invested_amount,
                position.current_value,
            )

def _group_key(contribution: Contribution, key: str) -> str:
    return getattr(contribution, key) or UNKNOWN

def build_segment_distribution(metrics: Iterable[DealMetrics], key: str) -> List[SegmentShare]:
    if key not in SEGMENT_KEYS:
        raise ValueError(f"Unsupported segment key: {key}")

    amounts: Dict[str, Decimal] = {}
    for contribution in iter_contributions(metrics):
        group = _group_key(contribution, key)
        amounts[group] = amounts.get(group, ZERO) + contribution.invested_amount

    total = sum(amounts.values(), ZERO)
    return [SegmentShare(group, amount, share_percent(amount, total)) for group, amount in amounts.items()]

def build_monthly_distribution(metrics: Iterable[DealMetrics]) -> List[MonthlyReturn]:
    invested: Dict[str, Decimal] = {}
    current: Dict[str, Decimal] = {}
    for contribution in iter_contributions(metrics):
        month = contribution.transaction_month
        invested[month] = invested.get(month, ZERO) + contribution.invested_amount
        current[month] = current.get(month, ZERO) + contribution.current_value

    total_invested = sum(invested.values(), ZERO)
    return [
        MonthlyReturn(
            month=month,
            invested=invested[month],
            current_value=current[month],
            percentage=share_percent(invested[month], total_invested),
            return_percent=return_percent(current[month], invested[month]),
        )
        for month in sorted(invested)
    ]

def build_profit_distribution(metrics: Iterable[DealMetrics]) -> List[ProfitShare]:
    profits: Dict[str, Decimal] = {}
    for contribution in iter_contributions(metrics):
        group = _group_key(contribution, "sector")
        profits[group] = profits.get(group, ZERO) + (contribution.current_value - contribution.invested_amount)

    total_profit = sum(profits.values(), ZERO)
    return [ProfitShare(group, profit, share_percent(profit, total_profit)) for group, profit in profits.items()]
