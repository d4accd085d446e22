# storefront/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin, require_user
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, PasswordChangeIn, UserRead, UserUpdate
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db), _: UserRead = Depends(require_admin)):
    return AuthService(db).list_users()


@router.patch("/me", response_model=UserRead)
def update_profile(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    user: UserRead = Depends(require_user),
):
    return AuthService(db).update_profile(user.id, payload)


@router.put("/{user_id}/password", response_model=MessageOut)
def change_password(
    user_id: int,
    payload: PasswordChangeIn,
    db: Session = Depends(get_db),
    user: UserRead = Depends(require_user),
):
    AuthService(db).change_password(user, user_id, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully."}
