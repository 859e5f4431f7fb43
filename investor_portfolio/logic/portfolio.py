from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Tuple
from .decimals import ZERO, return_percent, safe_divide
from .deal_metrics import DealMetrics

@dataclass
class PortfolioSummary:
    total_invested: Decimal
    total_current_value: Decimal
    moic: Decimal
    total_return_percent: Decimal
    capital_earned: Decimal
    first_investment_date: Optional[date]

def aggregate_portfolio(results: Iterable[Tuple[object, DealMetrics]]) -> PortfolioSummary:
    total_invested = ZERO
    total_current_value = ZERO
    first_investment_date = None

    for transaction, metrics in results:
        total_invested += metrics.invested_amount
        total_current_value += metrics.current_value
        tx_date = transaction.transaction_date
        if tx_date is not None and (first_investment_date is None or tx_date < first_investment_date):
            first_investment_date = tx_date

    # Portfolio MOIC defaults to 0 with nothing invested, unlike the per-deal default of 1
    return PortfolioSummary(
        total_invested=total_invested,
        total_current_value=total_current_value,
        moic=safe_divide(total_current_value, total_invested),
        total_return_percent=return_percent(total_current_value, total_invested),
        capital_earned=total_current_value - total_invested,
        first_investment_date=first_investment_date,
    )
