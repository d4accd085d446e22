# storefront/api/routers/banners.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import BannerCreate, BannerOut, BannerUpdate, MessageOut, UserRead
from storefront.services.banner_service import BannerService

router = APIRouter(prefix="/api/banners", tags=["banners"])


@router.get("", response_model=List[BannerOut])
def list_banners(type: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return BannerService(db).list_banners(type)


@router.get("/{banner_id}", response_model=BannerOut)
def get_banner(banner_id: int, db: Session = Depends(get_db)):
    return BannerService(db).get_banner(banner_id)


@router.post("", response_model=BannerOut, status_code=201)
def create_banner(payload: BannerCreate, db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    return BannerService(db).create_banner(payload)


@router.put("/{banner_id}", response_model=BannerOut)
def update_banner(
    banner_id: int,
    payload: BannerUpdate,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return BannerService(db).update_banner(banner_id, payload)


@router.delete("/{banner_id}", response_model=MessageOut)
def delete_banner(banner_id: int, db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    BannerService(db).delete_banner(banner_id)
    return {"message": "Banner deleted successfully"}
