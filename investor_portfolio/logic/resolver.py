import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, List, Optional
from .decimals import ZERO, to_decimal

logger = logging.getLogger(__name__)

CompanyLookup = Callable[[int], Optional[Any]]

@dataclass(frozen=True)
class ResolvedCompany:
    company: Any
    entry_valuation: Decimal
    # Only meaningful for deals backed by DealCompanyInvestment rows
    investment_amount: Decimal

def is_multi_company(deal) -> bool:
    return len(deal.deal_company_investments or []) > 1

def resolve_companies(deal, company_lookup: CompanyLookup) -> List[ResolvedCompany]:
    """Return the companies a deal's capital is attributed to.

    The checks run in a fixed order: company investment rows first, then the
    legacy ``underlying_company_id`` column, then the first legacy
    ``deals_underlying_companies`` link. An empty list means the deal could
    not be resolved and its capital is carried forward flat.
    """
    investments = deal.deal_company_investments or []
    if investments:
        return [
            ResolvedCompany(
                company=dci.company,
                entry_valuation=to_decimal(dci.entry_valuation),
                investment_amount=to_decimal(dci.investment_amount),
            )
            for dci in investments
        ]

    entry_valuation = to_decimal(deal.entry_valuation)

    if deal.underlying_company_id:
        company = company_lookup(deal.underlying_company_id)
        if company is None:
            logger.info("Deal %s points at missing company %s", deal.id, deal.underlying_company_id)
            return []
        return [ResolvedCompany(company, entry_valuation, ZERO)]

    links = deal.deals_underlying_companies or []
    if links:
        return [ResolvedCompany(links[0].company, entry_valuation, ZERO)]

    return []
