# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from services.product_service import ProductService
import schemas.product as product_schemas

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[product_schemas.CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return ProductService(db).list_categories()


@router.post("", response_model=product_schemas.CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(payload: product_schemas.CategoryCreate, db: Session = Depends(get_db)):
    return ProductService(db).create_category(payload.name, payload.description)
