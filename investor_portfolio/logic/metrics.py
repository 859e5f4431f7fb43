import logging
import math
from datetime import date
from functools import partial
from typing import Dict, List, Optional, Tuple
import pandas as pd
from pyxirr import InvalidPaymentsError, xirr
from sqlmodel import Session
from .. import crud
from ..models import Transaction
from .decimals import HUNDRED, as_float, to_decimal
from .deal_metrics import CompanyPosition, DealMetrics, compute_deal_metrics
from .distribution import (
    build_monthly_distribution,
    build_profit_distribution,
    build_segment_distribution,
)
from .portfolio import PortfolioSummary, aggregate_portfolio

logger = logging.getLogger(__name__)

def referenced_company_ids(transactions: List[Transaction]) -> set:
    ids = set()
    for tx in transactions:
        deal = tx.deal
        ids.update(dci.company_id for dci in deal.deal_company_investments)
        if deal.underlying_company_id:
            ids.add(deal.underlying_company_id)
        if deal.deals_underlying_companies:
            ids.add(deal.deals_underlying_companies[0].company_id)
    return ids

def evaluate_transactions(session: Session, transactions: List[Transaction]) -> List[Tuple[Transaction, DealMetrics]]:
    # One valuation query for the whole set
    latest = crud.fetch_latest_valuations(session, referenced_company_ids(transactions))
    company_lookup = partial(crud.get_company, session)
    return [(tx, compute_deal_metrics(tx, latest.get, company_lookup)) for tx in transactions]

def load_investor_metrics(session: Session, investor_id: int) -> List[Tuple[Transaction, DealMetrics]]:
    transactions = crud.fetch_transactions(session, investor_id)
    logger.debug("Investor %s: %d transactions", investor_id, len(transactions))
    return evaluate_transactions(session, transactions)

def calculate_irr(results: List[Tuple[Transaction, DealMetrics]], summary: PortfolioSummary,
                  as_of: Optional[date] = None) -> Optional[float]:
    # Outflows at each transaction date, current value as the terminal inflow
    cashflows = []
    dates = []
    for tx, metrics in results:
        if metrics.invested_amount > 0 and tx.transaction_date is not None:
            cashflows.append(-float(metrics.invested_amount))
            dates.append(tx.transaction_date)

    if not cashflows:
        return None

    if summary.total_current_value > 0:
        cashflows.append(float(summary.total_current_value))
        dates.append(as_of or pd.Timestamp.now().date())

    if len(cashflows) < 2:
        return None

    try:
        irr = xirr(dates, cashflows)
    except InvalidPaymentsError as e:
        logger.debug("IRR not computable: %s", e)
        return None
    if irr is None or not math.isfinite(irr):
        return None
    return irr

def summary_dict(summary: PortfolioSummary, irr: Optional[float] = None) -> Dict:
    return {
        "current_value": float(summary.total_current_value),
        "total_return_percent": float(summary.total_return_percent),
        "moic": float(summary.moic),
        "first_investment_date": summary.first_investment_date,
        "total_invested": float(summary.total_invested),
        "capital_earned": float(summary.capital_earned),
        "irr": round(irr, 4) if irr is not None else None,
    }

def company_dict(position: CompanyPosition) -> Dict:
    return {
        "company_id": position.company_id,
        "company_name": position.company_name,
        "sector": position.sector,
        "description": position.description,
        "current_value": float(position.current_value),
        "invested_amount": float(position.invested_amount),
        "moic": float(position.moic),
        "entry_valuation": float(position.entry_valuation),
        "latest_valuation": as_float(position.latest_valuation),
        "latest_valuation_date": position.latest_valuation_date,
    }

def investment_dict(metrics: DealMetrics) -> Dict:
    return {
        "deal_id": metrics.deal_id,
        "deal_name": metrics.deal_name,
        "company_names": metrics.company_names,
        "current_value": float(metrics.current_value),
        "invested_amount": float(metrics.invested_amount),
        "deal_date": metrics.deal_date,
        "transaction_date": metrics.transaction_date,
        "moic": float(metrics.moic),
        "deal_type": metrics.deal_type,
        "deal_status": metrics.deal_status,
        "is_multiple_company_deal": metrics.is_multi_company,
        "companies": [company_dict(c) for c in metrics.companies],
    }

def calculate_investor_portfolio(session: Session, investor_id: int, as_of: Optional[date] = None):
    results = load_investor_metrics(session, investor_id)
    summary = aggregate_portfolio(results)
    irr = calculate_irr(results, summary, as_of)

    logger.debug(
        "Investor %s: invested=%s current=%s moic=%s",
        investor_id, summary.total_invested, summary.total_current_value, summary.moic,
    )

    return {
        "portfolio": summary_dict(summary, irr),
        "investments": [investment_dict(metrics) for _, metrics in results],
    }

def calculate_portfolio_overview(session: Session, investor_id: int, as_of: Optional[date] = None):
    results = load_investor_metrics(session, investor_id)
    summary = aggregate_portfolio(results)
    return summary_dict(summary, calculate_irr(results, summary, as_of))

def calculate_company_distribution(session: Session, investor_id: int):
    metrics = [m for _, m in load_investor_metrics(session, investor_id)]
    return [
        {"company_name": s.key, "amount": float(s.amount), "percentage": float(s.percentage)}
        for s in build_segment_distribution(metrics, "company_name")
    ]

def calculate_industry_distribution(session: Session, investor_id: int):
    metrics = [m for _, m in load_investor_metrics(session, investor_id)]
    return [
        {"industry": s.key, "amount": float(s.amount), "percentage": float(s.percentage)}
        for s in build_segment_distribution(metrics, "sector")
    ]

def calculate_industry_profit_distribution(session: Session, investor_id: int):
    metrics = [m for _, m in load_investor_metrics(session, investor_id)]
    return [
        {"industry": p.key, "profit": float(p.profit), "percentage": float(p.percentage)}
        for p in build_profit_distribution(metrics)
    ]

def calculate_monthly_returns(session: Session, investor_id: int):
    metrics = [m for _, m in load_investor_metrics(session, investor_id)]
    return [
        {
            "month": m.month,
            "invested": float(m.invested),
            "current_value": float(m.current_value),
            "percentage": float(m.percentage),
            "return_percent": float(m.return_percent),
        }
        for m in build_monthly_distribution(metrics)
    ]

def calculate_fees(transaction: Transaction) -> Dict:
    net_capital = to_decimal(transaction.net_capital)
    management_fee = net_capital * to_decimal(transaction.management_fee_percent) / HUNDRED
    performance_fee = net_capital * to_decimal(transaction.performance_fee_percent) / HUNDRED
    return {
        "management_fee": float(management_fee),
        "performance_fee": float(performance_fee),
        "total_fees": float(management_fee + performance_fee),
    }

def calculate_investment_details(session: Session, investor_id: int, deal_id: int):
    transaction = crud.fetch_transaction_for_deal(session, investor_id, deal_id)
    if not transaction:
        return None

    [(_, metrics)] = evaluate_transactions(session, [transaction])
    deal = transaction.deal

    return {
        "investment": investment_dict(metrics),
        "deal": {
            "fund_vehicle": deal.deal_type,
            "partner": deal.partner_name,
            "description": deal.description,
            "number_of_companies": len(deal.deal_company_investments) or len(metrics.companies),
            "is_single_company_deal": not metrics.is_multi_company,
        },
        "fees": calculate_fees(transaction),
    }
