import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bikehub.core.exceptions import ConflictError
from bikehub.core.security import create_access_token, get_password_hash, is_admin_token, verify_password
from bikehub.db.models.user import User, UserRole
from bikehub.schemas.auth import LoginRequest, RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_DETAIL = "User with this email already exists"


def register_user(payload: RegisterRequest, db: Session) -> User:
    email = payload.email.lower()
    if db.scalar(select(User).where(User.email == email)):
        raise ConflictError(DUPLICATE_EMAIL_DETAIL)

    # Elevated roles are only granted together with the admin secret.
    role = payload.role.value if is_admin_token(payload.admin_token) else UserRole.USER.value
    user = User(
        name=payload.name.strip(),
        email=email,
        hashed_password=get_password_hash(payload.password),
        phone=payload.phone,
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_DETAIL) from None
    db.refresh(user)
    logger.info("user_registered user_id=%s role=%s", user.id, user.role)
    return user


def login_user(payload: LoginRequest, db: Session) -> TokenResponse:
    email = payload.email.lower()
    user = db.scalar(select(User).where(User.email == email))
    if not user or not user.is_active or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_access_token(subject=str(user.id), extra_claims={"role": user.role, "email": user.email})
    return TokenResponse(access_token=token)
