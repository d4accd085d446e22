# storefront/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import CategoryCreate, CategoryOut, CategoryUpdate, MessageOut, UserRead
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.get("/slug/{slug}", response_model=CategoryOut)
def get_category_by_slug(slug: str, db: Session = Depends(get_db)):
    return CatalogService(db).get_category_by_slug(slug)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_category(category_id)


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return CatalogService(db).create_category(payload)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return CatalogService(db).update_category(category_id, payload)


@router.delete("/{category_id}", response_model=MessageOut)
def delete_category(category_id: int, db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    CatalogService(db).delete_category(category_id)
    return {"message": "Category deleted successfully"}
