from sqlmodel import Session, create_engine, delete
from investor_portfolio.models import (
    Investor, Company, Deal, DealCompanyInvestment, DealUnderlyingCompany, Valuation, Transaction,
)
from investor_portfolio.config import settings
import os

def clear_database():
    # Use the pooler URL from environment if available, else from settings
    database_url = os.getenv("DATABASE_URL", settings.DATABASE_URL)
    engine = create_engine(database_url)

    with Session(engine) as session:
        print("Clearing database...")

        # Delete in order of dependencies
        session.exec(delete(Transaction))
        session.exec(delete(Valuation))
        session.exec(delete(DealCompanyInvestment))
        session.exec(delete(DealUnderlyingCompany))
        session.exec(delete(Deal))
        session.exec(delete(Company))
        session.exec(delete(Investor))

        session.commit()
        print("Database cleared successfully! You can now start adding your own data.")

if __name__ == "__main__":
    clear_database()
