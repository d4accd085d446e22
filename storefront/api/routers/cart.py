# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartItemUpdate, CartOut, MessageOut, UserRead
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return CartService(db).get_cart(user)


@router.post("", response_model=CartOut, status_code=201)
def add_item(payload: CartItemIn, db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return CartService(db).add_product(user, payload.product_id, payload.quantity, payload.variant_info)


@router.put("/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: CartItemUpdate,
    db: Session = Depends(get_db),
    user: UserRead = Depends(require_user),
):
    return CartService(db).update_quantity(user, item_id, payload.quantity)


@router.delete("/{item_id}", response_model=CartOut)
def remove_item(item_id: int, db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return CartService(db).remove_item(user, item_id)


@router.delete("", response_model=MessageOut)
def clear_cart(db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    CartService(db).clear_cart(user)
    return {"message": "Cart cleared successfully"}
