from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
from .models import Investor, Company, Deal, DealCompanyInvestment, DealUnderlyingCompany, Transaction, Valuation

# Investors
def get_investor(session: Session, investor_id: int) -> Optional[Investor]:
    return session.get(Investor, investor_id)

# Companies
def get_company(session: Session, company_id: int) -> Optional[Company]:
    return session.get(Company, company_id)

# Transactions
def _with_deal_graph(stmt):
    return stmt.options(
        selectinload(Transaction.deal)
        .selectinload(Deal.deal_company_investments)
        .selectinload(DealCompanyInvestment.company),
        selectinload(Transaction.deal)
        .selectinload(Deal.deals_underlying_companies)
        .selectinload(DealUnderlyingCompany.company),
    )

def fetch_transactions(session: Session, investor_id: int) -> List[Transaction]:
    stmt = select(Transaction).where(Transaction.investor_id == investor_id).order_by(
        Transaction.transaction_date.asc(), Transaction.id.asc()
    )
    return list(session.exec(_with_deal_graph(stmt)).all())

def fetch_transaction_for_deal(session: Session, investor_id: int, deal_id: int) -> Optional[Transaction]:
    stmt = select(Transaction).where(
        Transaction.investor_id == investor_id,
        Transaction.deal_id == deal_id,
    ).order_by(Transaction.transaction_date.asc(), Transaction.id.asc())
    return session.exec(_with_deal_graph(stmt)).first()

# Valuations
def fetch_latest_valuation(session: Session, company_id: int) -> Optional[Valuation]:
    stmt = select(Valuation).where(Valuation.company_id == company_id).order_by(
        Valuation.valuation_date.desc(), Valuation.id.desc()
    )
    return session.exec(stmt).first()

def fetch_latest_valuations(session: Session, company_ids: Iterable[int]) -> Dict[int, Valuation]:
    ids = {cid for cid in company_ids if cid is not None}
    if not ids:
        return {}
    stmt = select(Valuation).where(Valuation.company_id.in_(ids)).order_by(
        Valuation.valuation_date.desc(), Valuation.id.desc()
    )
    latest: Dict[int, Valuation] = {}
    for valuation in session.exec(stmt).all():
        # First row per company wins
        latest.setdefault(valuation.company_id, valuation)
    return latest
