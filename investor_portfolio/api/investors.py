from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from typing import List
from ..database import get_session
from .. import crud, schemas
from ..logic import metrics

router = APIRouter(prefix="/api/investors", tags=["investors"])

def require_investor(investor_id: int, session: Session = Depends(get_session)):
    investor = crud.get_investor(session, investor_id)
    if not investor:
        raise HTTPException(status_code=404, detail="Investor not found")
    return investor

@router.get("/{investor_id}/portfolio", response_model=schemas.Portfolio)
def read_portfolio(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_investor_portfolio(session, investor.id)

@router.get("/{investor_id}/portfolio/overview", response_model=schemas.PortfolioSummary)
def read_portfolio_overview(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_portfolio_overview(session, investor.id)

@router.get("/{investor_id}/portfolio/companies", response_model=List[schemas.CompanyDistribution])
def read_company_distribution(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_company_distribution(session, investor.id)

@router.get("/{investor_id}/portfolio/industries", response_model=List[schemas.IndustryDistribution])
def read_industry_distribution(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_industry_distribution(session, investor.id)

@router.get("/{investor_id}/portfolio/industry-profits", response_model=List[schemas.IndustryProfit])
def read_industry_profits(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_industry_profit_distribution(session, investor.id)

@router.get("/{investor_id}/portfolio/monthly-returns", response_model=List[schemas.MonthlyReturn])
def read_monthly_returns(investor=Depends(require_investor), session: Session = Depends(get_session)):
    return metrics.calculate_monthly_returns(session, investor.id)

@router.get("/{investor_id}/investments/{deal_id}", response_model=schemas.InvestmentDetails)
def read_investment_details(deal_id: int, investor=Depends(require_investor), session: Session = Depends(get_session)):
    details = metrics.calculate_investment_details(session, investor.id, deal_id)
    if not details:
        raise HTTPException(status_code=404, detail="Investment not found")
    return details
