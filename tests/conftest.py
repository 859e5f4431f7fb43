"""
Pytest configuration and shared fixtures for the portfolio valuation tests.

Core logic only reads attributes, so unit tests build entities with the
``make_*`` helpers below (plain namespaces). Store and HTTP tests use an
in-memory SQLite database through the ``session`` and ``client`` fixtures.

Usage:
    from conftest import make_company, make_deal, make_transaction
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from investor_portfolio.database import get_session
from investor_portfolio.main import app
from investor_portfolio.models import (
    Company,
    Deal,
    DealCompanyInvestment,
    DealUnderlyingCompany,
    Investor,
    Transaction,
    Valuation,
)


# =============================================================================
# Plain entity helpers
# =============================================================================

def make_company(id: int, name: Optional[str] = None, sector: Optional[str] = None,
                 description: Optional[str] = None) -> SimpleNamespace:
    return SimpleNamespace(id=id, name=name, sector=sector, description=description)


def make_dci(company, investment_amount=None, entry_valuation=None) -> SimpleNamespace:
    return SimpleNamespace(
        company=company,
        company_id=company.id,
        investment_amount=investment_amount,
        entry_valuation=entry_valuation,
    )


def make_link(company) -> SimpleNamespace:
    return SimpleNamespace(company=company, company_id=company.id)


def make_deal(
    id: int = 1,
    name: str = "Deal",
    deal_company_investments: Optional[list] = None,
    deals_underlying_companies: Optional[list] = None,
    underlying_company_id: Optional[int] = None,
    entry_valuation=None,
    deal_date: Optional[date] = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=id,
        name=name,
        deal_date=deal_date,
        deal_type="SPV",
        status="active",
        entry_valuation=entry_valuation,
        underlying_company_id=underlying_company_id,
        deal_company_investments=deal_company_investments or [],
        deals_underlying_companies=deals_underlying_companies or [],
    )


def make_transaction(deal, net_capital=None, transaction_date: date = date(2024, 1, 15),
                     management_fee_percent=None, performance_fee_percent=None) -> SimpleNamespace:
    return SimpleNamespace(
        deal=deal,
        deal_id=deal.id,
        net_capital=net_capital,
        transaction_date=transaction_date,
        management_fee_percent=management_fee_percent,
        performance_fee_percent=performance_fee_percent,
    )


def make_valuation(company_id: int, post_money, valuation_date: date = date(2024, 6, 30)) -> SimpleNamespace:
    return SimpleNamespace(company_id=company_id, post_money=Decimal(post_money), valuation_date=valuation_date)


def valuation_lookup(*valuations) -> Callable:
    by_company: Dict[int, SimpleNamespace] = {v.company_id: v for v in valuations}
    return by_company.get


def company_lookup(*companies) -> Callable:
    by_id = {c.id: c for c in companies}
    return by_id.get


# =============================================================================
# Database fixtures
# =============================================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(session) -> Dict[str, object]:
    """
    One investor with four deals:
      - single: 100,000 into a one-company deal, entry 1M, latest 2M (MOIC 2)
      - basket: 90,000 split 60/40 across two companies, A at MOIC 1.5, B unvalued
      - legacy: 20,000 via underlying_company_id, entry 4M, latest 3M
      - blind:  50,000 with no resolvable company
    """
    investor = Investor(name="Test Investor")
    other = Investor(name="Other Investor")
    alpha = Company(name="Alpha", sector="Software", description="Alpha Inc")
    beta = Company(name="Beta", sector="Healthcare")
    gamma = Company(name="Gamma", sector=None)
    delta = Company(name="Delta", sector="Software")
    session.add_all([investor, other, alpha, beta, gamma, delta])
    session.commit()

    single = Deal(name="Alpha A", deal_date=date(2023, 1, 10), deal_type="SPV", status="active",
                  partner_name="Acme Partners", description="Alpha series A")
    basket = Deal(name="Basket", deal_date=date(2023, 3, 1), deal_type="Fund", status="active")
    legacy = Deal(name="Delta Legacy", entry_valuation=Decimal("4000000"), underlying_company_id=delta.id)
    blind = Deal(name="Blind Pool")
    session.add_all([single, basket, legacy, blind])
    session.commit()

    session.add_all([
        DealCompanyInvestment(deal_id=single.id, company_id=alpha.id,
                              investment_amount=Decimal("500000"), entry_valuation=Decimal("1000000")),
        DealCompanyInvestment(deal_id=basket.id, company_id=beta.id,
                              investment_amount=Decimal("60000"), entry_valuation=Decimal("1000000")),
        DealCompanyInvestment(deal_id=basket.id, company_id=gamma.id,
                              investment_amount=Decimal("40000"), entry_valuation=Decimal("2000000")),
        # Ignored: underlying_company_id wins over the link table
        DealUnderlyingCompany(deal_id=legacy.id, company_id=alpha.id),
        Valuation(company_id=alpha.id, post_money=Decimal("1200000"), valuation_date=date(2023, 6, 30)),
        Valuation(company_id=alpha.id, post_money=Decimal("2000000"), valuation_date=date(2024, 6, 30)),
        Valuation(company_id=beta.id, post_money=Decimal("1500000"), valuation_date=date(2024, 6, 30)),
        Valuation(company_id=delta.id, post_money=Decimal("3000000"), valuation_date=date(2024, 6, 30)),
        Transaction(investor_id=investor.id, deal_id=single.id, net_capital=Decimal("100000"),
                    transaction_date=date(2023, 1, 15), management_fee_percent=Decimal("2"),
                    performance_fee_percent=Decimal("20")),
        Transaction(investor_id=investor.id, deal_id=basket.id, net_capital=Decimal("90000"),
                    transaction_date=date(2023, 3, 5)),
        Transaction(investor_id=investor.id, deal_id=legacy.id, net_capital=Decimal("20000"),
                    transaction_date=date(2023, 3, 20)),
        Transaction(investor_id=investor.id, deal_id=blind.id, net_capital=Decimal("50000"),
                    transaction_date=date(2024, 2, 1)),
    ])
    session.commit()

    return {
        "investor": investor,
        "other": other,
        "companies": {"alpha": alpha, "beta": beta, "gamma": gamma, "delta": delta},
        "deals": {"single": single, "basket": basket, "legacy": legacy, "blind": blind},
    }
