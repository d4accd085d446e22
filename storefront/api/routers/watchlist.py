# storefront/api/routers/watchlist.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, UserRead, WatchlistIn, WatchlistItemOut
from storefront.services.watchlist_service import WatchlistService

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


@router.get("", response_model=List[WatchlistItemOut])
def list_watchlist(db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return WatchlistService(db).list_items(user)


@router.post("", response_model=WatchlistItemOut, status_code=201)
def add_to_watchlist(payload: WatchlistIn, db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return WatchlistService(db).add(user, payload.product_id)


@router.delete("/{item_id}", response_model=MessageOut)
def remove_from_watchlist(item_id: int, db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    WatchlistService(db).remove(user, item_id)
    return {"message": "Watchlist item removed successfully"}
