from datetime import date
from typing import List, Optional
from sqlmodel import SQLModel
from .models import CompanyBase, ValuationBase

class ValuationRead(ValuationBase):
    id: int

class CompanyRead(CompanyBase):
    id: int
    latest_valuation: Optional[ValuationRead] = None

class PortfolioSummary(SQLModel):
    current_value: float
    total_return_percent: float
    moic: float
    first_investment_date: Optional[date] = None
    total_invested: float
    capital_earned: float
    irr: Optional[float] = None

class CompanyBreakdown(SQLModel):
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    sector: Optional[str] = None
    description: Optional[str] = None
    current_value: float
    invested_amount: float
    moic: float
    entry_valuation: float
    latest_valuation: Optional[float] = None
    latest_valuation_date: Optional[date] = None

class InvestmentSummary(SQLModel):
    deal_id: Optional[int] = None
    deal_name: Optional[str] = None
    company_names: str = ""
    current_value: float
    invested_amount: float
    deal_date: Optional[date] = None
    transaction_date: Optional[date] = None
    moic: float
    deal_type: Optional[str] = None
    deal_status: Optional[str] = None
    is_multiple_company_deal: bool = False
    companies: List[CompanyBreakdown] = []

class Portfolio(SQLModel):
    portfolio: PortfolioSummary
    investments: List[InvestmentSummary]

class CompanyDistribution(SQLModel):
    company_name: str
    amount: float
    percentage: float

class IndustryDistribution(SQLModel):
    industry: str
    amount: float
    percentage: float

class IndustryProfit(SQLModel):
    industry: str
    profit: float
    percentage: float

class MonthlyReturn(SQLModel):
    month: str
    invested: float
    current_value: float
    percentage: float
    return_percent: float

class DealInfo(SQLModel):
    fund_vehicle: Optional[str] = None
    partner: Optional[str] = None
    description: Optional[str] = None
    number_of_companies: int
    is_single_company_deal: bool

class FeeSummary(SQLModel):
    management_fee: float
    performance_fee: float
    total_fees: float

class InvestmentDetails(SQLModel):
    investment: InvestmentSummary
    deal: DealInfo
    fees: FeeSummary
