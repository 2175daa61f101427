# backend/routes/products.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from services.product_service import ProductService
from utils.pagination import paginate
import schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=product_schemas.ProductListPage)
def list_products(
    name: Optional[str] = Query(None),
    sku: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort_by: str = Query("id"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    query = ProductService(db).search_products(name, sku, category_id, is_active, sort_by.lower(), order)
    return paginate(query, page, page_size)


@router.post("", response_model=product_schemas.ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(payload: product_schemas.ProductCreate, db: Session = Depends(get_db)):
    return ProductService(db).create_product(
        payload.sku, payload.name, payload.description, payload.category_id,
    )


@router.get("/sku/{sku}", response_model=product_schemas.ProductResponse)
def get_product_by_sku(sku: str, db: Session = Depends(get_db)):
    return ProductService(db).get_by_sku(sku)


@router.get("/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductService(db).get_product(product_id)


# =========================
# PARTIAL UPDATE
# =========================
@router.patch("/{product_id}", response_model=product_schemas.ProductResponse)
def update_product(
    product_id: int,
    payload: product_schemas.ProductEditRequest,
    db: Session = Depends(get_db),
):
    return ProductService(db).update_product(
        product_id,
        name=payload.name,
        description=payload.description,
        is_active=payload.is_active,
        category_id=payload.category_id,
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    ProductService(db).delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
