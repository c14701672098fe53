"""Financial transaction endpoints: CRUD, filtered summaries and monthly totals."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db
from farmhub.models import CATEGORIES_BY_TYPE, EXPENSE_CATEGORIES, INCOME_CATEGORIES, Farm, Transaction
from farmhub.rate_limit import limiter
from farmhub.routers.utils import get_or_404, normalize_text, require_text
from farmhub.schemas import (
    FinancialSummary, MonthlyTotal, TransactionCreate, TransactionResponse,
    TransactionType, TransactionUpdate,
)
from farmhub.schemas.reports import CategoriesResponse
from farmhub.services.calculations import financial_summary, monthly_totals

settings = get_settings()

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _check_category(transaction_type: str, category: str) -> str:
    cleaned = require_text(category, "category")
    if cleaned not in CATEGORIES_BY_TYPE[transaction_type]:
        raise HTTPException(
            status_code=400,
            detail=f"Category '{cleaned}' is not valid for {transaction_type} transactions",
        )
    return cleaned


def _filtered_query(
    db: Session,
    farm_id: Optional[int],
    type: Optional[str],
    category: Optional[str],
    q: Optional[str],
):
    query = db.query(Transaction).join(Transaction.farm).options(joinedload(Transaction.farm))
    if farm_id is not None:
        query = query.filter(Transaction.farm_id == farm_id)
    if type is not None:
        query = query.filter(Transaction.type == type)
    if category:
        query = query.filter(Transaction.category == category)
    term = normalize_text(q)
    if term:
        pattern = f"%{term.lower()}%"
        query = query.filter(or_(
            func.lower(Transaction.description).like(pattern),
            func.lower(Transaction.category).like(pattern),
            func.lower(Farm.name).like(pattern),
        ))
    return query


@router.get("", response_model=List[TransactionResponse])
def list_transactions(
    farm_id: Optional[int] = None,
    type: Optional[TransactionType] = None,
    category: Optional[str] = None,
    q: Optional[str] = Query(default=None, max_length=100),
    db: Session = Depends(get_db)
):
    """List transactions, newest first."""
    query = _filtered_query(db, farm_id, type, category, q)
    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()


@router.get("/summary", response_model=FinancialSummary)
def get_summary(
    farm_id: Optional[int] = None,
    type: Optional[TransactionType] = None,
    category: Optional[str] = None,
    q: Optional[str] = Query(default=None, max_length=100),
    db: Session = Depends(get_db)
):
    """Income, expenses and profit over the same filters as the listing."""
    return financial_summary(_filtered_query(db, farm_id, type, category, q).all())


@router.get("/monthly", response_model=List[MonthlyTotal])
def get_monthly_totals(
    year: Optional[int] = Query(default=None, ge=1900, le=2100),
    farm_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """Income and expenses per month of one year (defaults to the current year)."""
    year = year or date.today().year
    query = db.query(Transaction).filter(
        Transaction.date >= date(year, 1, 1),
        Transaction.date <= date(year, 12, 31),
    )
    if farm_id is not None:
        query = query.filter(Transaction.farm_id == farm_id)
    return monthly_totals(query.all(), year)


@router.get("/categories", response_model=CategoriesResponse)
def list_categories():
    return {"income": list(INCOME_CATEGORIES), "expense": list(EXPENSE_CATEGORIES)}


@router.post("", response_model=TransactionResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_transaction(request: Request, data: TransactionCreate, db: Session = Depends(get_db)):
    get_or_404(db, Farm, data.farm_id, "Farm")

    transaction = Transaction(
        farm_id=data.farm_id,
        type=data.type,
        category=_check_category(data.type, data.category),
        amount=data.amount,
        date=data.date or date.today(),
        description=require_text(data.description, "description"),
    )

    try:
        db.add(transaction)
        db.flush()
        log_change(db, "transaction", transaction.id, "CREATE", None, entity_to_dict(transaction))
        db.commit()
        db.refresh(transaction)
    except Exception:
        db.rollback()
        raise

    return transaction


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Transaction, transaction_id, "Transaction")


@router.put("/{transaction_id}", response_model=TransactionResponse)
@limiter.limit(settings.write_rate_limit)
def update_transaction(request: Request, transaction_id: int, data: TransactionUpdate, db: Session = Depends(get_db)):
    """Update a transaction; the category is re-checked against the resulting type."""
    transaction = get_or_404(db, Transaction, transaction_id, "Transaction")
    before = entity_to_dict(transaction)

    transaction_type = data.type or transaction.type
    category = data.category if data.category is not None else transaction.category
    transaction.category = _check_category(transaction_type, category)
    transaction.type = transaction_type

    if data.farm_id is not None and data.farm_id != transaction.farm_id:
        get_or_404(db, Farm, data.farm_id, "Farm")
        transaction.farm_id = data.farm_id
    if data.amount is not None:
        transaction.amount = data.amount
    if data.date is not None:
        transaction.date = data.date
    if data.description is not None:
        transaction.description = require_text(data.description, "description")

    try:
        db.flush()
        log_change(db, "transaction", transaction.id, "UPDATE", before, entity_to_dict(transaction))
        db.commit()
        db.refresh(transaction)
    except Exception:
        db.rollback()
        raise

    return transaction


@router.delete("/{transaction_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_transaction(request: Request, transaction_id: int, db: Session = Depends(get_db)):
    transaction = get_or_404(db, Transaction, transaction_id, "Transaction")
    before = entity_to_dict(transaction)

    try:
        db.delete(transaction)
        log_change(db, "transaction", transaction_id, "DELETE", before, None)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return None
