# storefront/api/routers/settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import UpiSettings, UserRead
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/upi", response_model=UpiSettings)
def get_upi_settings(db: Session = Depends(get_db)):
    return OrderService(db).get_upi_settings()


@router.put("/upi", response_model=UpiSettings)
def update_upi_settings(payload: UpiSettings, db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    return OrderService(db).update_upi_settings(payload)
