from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bikehub.core.exceptions import ForbiddenError, NotFoundError
from bikehub.core.security import decode_access_token
from bikehub.db.models import Dealer, User, UserRole
from bikehub.db.session import get_db
from bikehub.services.booking_service import resolve_dealer_for_user

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    unauthorized_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized, token failed",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        user_id = int(payload.get("sub", ""))
    except (ValueError, TypeError):
        raise unauthorized_exc

    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise unauthorized_exc
    return user


def require_roles(*roles: UserRole | str) -> Callable[[User], User]:
    allowed_roles = {role.value if isinstance(role, UserRole) else role for role in roles}

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise ForbiddenError("Not enough permissions")
        return current_user

    return checker


def get_current_dealer(
    current_user: User = Depends(require_roles(UserRole.DEALER, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> Dealer:
    dealer = resolve_dealer_for_user(db=db, user=current_user)
    if dealer is None:
        raise NotFoundError("Dealer not found")
    return dealer
