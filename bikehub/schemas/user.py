from datetime import datetime

from pydantic import BaseModel, EmailStr

from bikehub.db.models.user import UserRole


class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: str | None
    role: UserRole
    dealer_id: int | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None

    model_config = {"from_attributes": True}
