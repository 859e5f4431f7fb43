import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable, List, Optional
from .decimals import ONE, ZERO, safe_divide, to_decimal
from .resolver import CompanyLookup, ResolvedCompany, is_multi_company, resolve_companies

logger = logging.getLogger(__name__)

ValuationLookup = Callable[[int], Optional[Any]]

@dataclass
class CompanyPosition:
    company_id: Optional[int]
    company_name: Optional[str]
    sector: Optional[str]
    invested_amount: Decimal
    current_value: Decimal
    moic: Decimal
    entry_valuation: Decimal
    latest_valuation: Optional[Decimal] = None
    latest_valuation_date: Optional[date] = None
    description: Optional[str] = None

@dataclass
class DealMetrics:
    deal_id: Optional[int]
    deal_name: Optional[str]
    deal_date: Optional[date]
    deal_type: Optional[str]
    deal_status: Optional[str]
    transaction_date: Optional[date]
    is_multi_company: bool
    invested_amount: Decimal
    current_value: Decimal
    moic: Decimal
    companies: List[CompanyPosition] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return bool(self.companies)

    @property
    def company_names(self) -> str:
        return ", ".join(c.company_name or "Unknown" for c in self.companies)

def position_moic(latest_valuation, entry_valuation: Decimal) -> Decimal:
    """Latest post-money over entry valuation, or 1 when either is missing."""
    if latest_valuation is not None and entry_valuation > 0:
        return to_decimal(latest_valuation.post_money) / entry_valuation
    return ONE

def _value_position(resolved: ResolvedCompany, amount: Decimal,
                    latest_valuation: ValuationLookup) -> CompanyPosition:
    company = resolved.company
    company_id = getattr(company, "id", None)
    latest = latest_valuation(company_id) if company_id is not None else None
    moic = position_moic(latest, resolved.entry_valuation)
    current_value = amount * moic

    logger.debug(
        "Company %s: invested=%s entry=%s latest=%s moic=%s current=%s",
        getattr(company, "name", None), amount, resolved.entry_valuation,
        latest.post_money if latest is not None else None, moic, current_value,
    )

    return CompanyPosition(
        company_id=company_id,
        company_name=getattr(company, "name", None),
        sector=getattr(company, "sector", None),
        invested_amount=amount,
        current_value=current_value,
        moic=moic,
        entry_valuation=resolved.entry_valuation,
        latest_valuation=to_decimal(latest.post_money) if latest is not None else None,
        latest_valuation_date=latest.valuation_date if latest is not None else None,
        description=getattr(company, "description", None),
    )

def compute_deal_metrics(transaction, latest_valuation: ValuationLookup,
                         company_lookup: CompanyLookup) -> DealMetrics:
    deal = transaction.deal
    invested = to_decimal(transaction.net_capital)
    multi = is_multi_company(deal)
    resolved = resolve_companies(deal, company_lookup)

    logger.debug("Deal %s (%s): invested=%s multi=%s", deal.id, deal.name, invested, multi)

    positions: List[CompanyPosition] = []
    if multi:
        total_deal_investment = sum((r.investment_amount for r in resolved), ZERO)
        for r in resolved:
            proportion = safe_divide(r.investment_amount, total_deal_investment)
            positions.append(_value_position(r, invested * proportion, latest_valuation))
        current_value = sum((p.current_value for p in positions), ZERO)
    elif resolved:
        position = _value_position(resolved[0], invested, latest_valuation)
        positions.append(position)
        current_value = position.current_value
    else:
        logger.info("No company resolved for deal %s, carrying %s forward", deal.id, invested)
        current_value = invested

    return DealMetrics(
        deal_id=deal.id,
        deal_name=deal.name,
        deal_date=deal.deal_date,
        deal_type=deal.deal_type,
        deal_status=deal.status,
        transaction_date=transaction.transaction_date,
        is_multi_company=multi,
        invested_amount=invested,
        current_value=current_value,
        moic=safe_divide(current_value, invested, default=ONE),
        companies=positions,
    )
