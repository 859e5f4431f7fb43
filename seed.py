from sqlmodel import Session, create_engine, SQLModel
from investor_portfolio.models import (
    Investor, Company, Deal, DealCompanyInvestment, DealUnderlyingCompany, Valuation, Transaction,
)
from investor_portfolio.logic.metrics import calculate_investor_portfolio
from datetime import date
from decimal import Decimal
import os

# Use a local SQLite for testing if no DB_URL provided
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./test.db")
engine = create_engine(DATABASE_URL)

def seed_data():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        # 1. Investor
        investor = Investor(name="Demo Investor", email="investor@example.com")
        session.add(investor)

        # 2. Companies
        companies = {}
        for name, sector in [
            ("Northwind Robotics", "Industrials"),
            ("Lumen Health", "Healthcare"),
            ("Quarry Data", "Software"),
            ("Harbor Freight AI", "Logistics"),
        ]:
            company = Company(name=name, sector=sector, description=f"{name} portfolio company")
            session.add(company)
            companies[name] = company
        session.commit()

        # 3. Deals
        # Single company through a company investment row
        single = Deal(name="Northwind Series A", deal_date=date(2023, 1, 15), deal_type="SPV", status="active")
        # Two companies sharing one vehicle
        basket = Deal(name="Health & Data Basket", deal_date=date(2023, 6, 1), deal_type="Fund", status="active")
        # Legacy deal linked through underlying_company_id
        legacy = Deal(
            name="Harbor Seed",
            deal_date=date(2022, 9, 10),
            deal_type="SPV",
            status="active",
            entry_valuation=Decimal("8000000"),
            underlying_company_id=companies["Harbor Freight AI"].id,
        )
        # Legacy deal linked through the link table
        linked = Deal(name="Quarry Secondary", deal_date=date(2024, 2, 20), deal_type="Secondary",
                      status="active", entry_valuation=Decimal("30000000"))
        # Nothing to resolve, carried at cost
        blind = Deal(name="Blind Pool", deal_date=date(2024, 4, 1), deal_type="Fund", status="pending")
        session.add_all([single, basket, legacy, linked, blind])
        session.commit()

        session.add_all([
            DealCompanyInvestment(deal_id=single.id, company_id=companies["Northwind Robotics"].id,
                                  investment_amount=Decimal("500000"), entry_valuation=Decimal("1000000")),
            DealCompanyInvestment(deal_id=basket.id, company_id=companies["Lumen Health"].id,
                                  investment_amount=Decimal("60000"), entry_valuation=Decimal("20000000")),
            DealCompanyInvestment(deal_id=basket.id, company_id=companies["Quarry Data"].id,
                                  investment_amount=Decimal("40000"), entry_valuation=Decimal("25000000")),
            DealUnderlyingCompany(deal_id=linked.id, company_id=companies["Quarry Data"].id),
        ])

        # 4. Valuations
        session.add_all([
            Valuation(company_id=companies["Northwind Robotics"].id, post_money=Decimal("1500000"), valuation_date=date(2023, 12, 31)),
            Valuation(company_id=companies["Northwind Robotics"].id, post_money=Decimal("2000000"), valuation_date=date(2024, 12, 31)),
            Valuation(company_id=companies["Lumen Health"].id, post_money=Decimal("30000000"), valuation_date=date(2024, 6, 30)),
            Valuation(company_id=companies["Quarry Data"].id, post_money=Decimal("36000000"), valuation_date=date(2024, 9, 30)),
            Valuation(company_id=companies["Harbor Freight AI"].id, post_money=Decimal("6000000"), valuation_date=date(2024, 3, 31)),
        ])

        # 5. Transactions
        session.add_all([
            Transaction(investor_id=investor.id, deal_id=single.id, net_capital=Decimal("100000"),
                        transaction_date=date(2023, 1, 20), management_fee_percent=Decimal("2"),
                        performance_fee_percent=Decimal("20")),
            Transaction(investor_id=investor.id, deal_id=basket.id, net_capital=Decimal("90000"),
                        transaction_date=date(2023, 6, 5)),
            Transaction(investor_id=investor.id, deal_id=legacy.id, net_capital=Decimal("25000"),
                        transaction_date=date(2022, 9, 15)),
            Transaction(investor_id=investor.id, deal_id=linked.id, net_capital=Decimal("40000"),
                        transaction_date=date(2024, 2, 25)),
            Transaction(investor_id=investor.id, deal_id=blind.id, net_capital=Decimal("50000"),
                        transaction_date=date(2024, 4, 2)),
        ])
        session.commit()
        print(f"Created Investor: {investor.name} ({investor.id})")

        # 6. Calculate Metrics
        result = calculate_investor_portfolio(session, investor.id)
        print("\nPortfolio Metrics:")
        for k, v in result["portfolio"].items():
            print(f"{k}: {v}")
        print("\nInvestments:")
        for inv in result["investments"]:
            print(f"{inv['deal_name']}: invested={inv['invested_amount']} current={inv['current_value']} moic={inv['moic']:.3f}")

if __name__ == "__main__":
    seed_data()
