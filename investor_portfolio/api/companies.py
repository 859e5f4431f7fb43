from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from ..database import get_session
from .. import crud, schemas

router = APIRouter(tags=["companies"])

@router.get("/api/companies/{company_id}", response_model=schemas.CompanyRead)
def read_company(company_id: int, session: Session = Depends(get_session)):
    company = crud.get_company(session, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    latest = crud.fetch_latest_valuation(session, company_id)
    return schemas.CompanyRead(
        **company.model_dump(include={"id", "name", "sector", "description"}),
        latest_valuation=schemas.ValuationRead.model_validate(latest) if latest else None,
    )
