from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional, List
from sqlmodel import SQLModel, Field, Relationship

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class InvestorBase(SQLModel):
    name: str
    email: Optional[str] = None

class Investor(InvestorBase, table=True):
    __tablename__ = "investors"
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    transactions: List["Transaction"] = Relationship(back_populates="investor")

class CompanyBase(SQLModel):
    name: Optional[str] = None
    sector: Optional[str] = None
    description: Optional[str] = None

class Company(CompanyBase, table=True):
    __tablename__ = "companies"
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    valuations: List["Valuation"] = Relationship(back_populates="company")

class DealBase(SQLModel):
    name: str
    deal_date: Optional[date] = None
    deal_type: Optional[str] = None
    status: Optional[str] = None
    partner_name: Optional[str] = None
    description: Optional[str] = None
    # Legacy single-company schema
    entry_valuation: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=2)
    underlying_company_id: Optional[int] = Field(default=None, foreign_key="companies.id")

class Deal(DealBase, table=True):
    __tablename__ = "deals"
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    deal_company_investments: List["DealCompanyInvestment"] = Relationship(
        back_populates="deal", sa_relationship_kwargs={"order_by": "DealCompanyInvestment.id"}
    )
    deals_underlying_companies: List["DealUnderlyingCompany"] = Relationship(
        back_populates="deal", sa_relationship_kwargs={"order_by": "DealUnderlyingCompany.id"}
    )
    transactions: List["Transaction"] = Relationship(back_populates="deal")

class DealCompanyInvestment(SQLModel, table=True):
    __tablename__ = "deal_company_investments"
    id: Optional[int] = Field(default=None, primary_key=True)
    deal_id: int = Field(foreign_key="deals.id")
    company_id: int = Field(foreign_key="companies.id")
    investment_amount: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=2)
    entry_valuation: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=2)

    deal: Deal = Relationship(back_populates="deal_company_investments")
    company: Company = Relationship()

class DealUnderlyingCompany(SQLModel, table=True):
    __tablename__ = "deals_underlying_companies"
    id: Optional[int] = Field(default=None, primary_key=True)
    deal_id: int = Field(foreign_key="deals.id")
    company_id: int = Field(foreign_key="companies.id")

    deal: Deal = Relationship(back_populates="deals_underlying_companies")
    company: Company = Relationship()

class ValuationBase(SQLModel):
    company_id: int = Field(foreign_key="companies.id", index=True)
    post_money: Decimal = Field(max_digits=20, decimal_places=2)
    valuation_date: date

class Valuation(ValuationBase, table=True):
    __tablename__ = "valuations"
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    company: Company = Relationship(back_populates="valuations")

class TransactionBase(SQLModel):
    investor_id: int = Field(foreign_key="investors.id", index=True)
    deal_id: int = Field(foreign_key="deals.id")
    net_capital: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=2)
    transaction_date: date
    management_fee_percent: Optional[Decimal] = Field(default=None, max_digits=7, decimal_places=4)
    performance_fee_percent: Optional[Decimal] = Field(default=None, max_digits=7, decimal_places=4)

class Transaction(TransactionBase, table=True):
    __tablename__ = "transactions"
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    investor: Investor = Relationship(back_populates="transactions")
    deal: Deal = Relationship(back_populates="transactions")
