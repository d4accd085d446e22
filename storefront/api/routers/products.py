# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, ProductCreate, ProductOut, ProductUpdate, UserRead
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return CatalogService(db).list_products()


@router.get("/category/{category_id}", response_model=List[ProductOut])
def list_products_by_category(category_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).list_products_by_category(category_id)


@router.get("/category-slug/{slug}", response_model=List[ProductOut])
def list_products_by_category_slug(slug: str, db: Session = Depends(get_db)):
    return CatalogService(db).list_products_by_category_slug(slug)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_product(product_id)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return CatalogService(db).create_product(payload)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return CatalogService(db).update_product(product_id, payload)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(product_id: int, db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    CatalogService(db).delete_product(product_id)
    return {"message": "Product deleted successfully"}
