from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from schemas.itinerary import WIRE_CONFIG


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime

    model_config = WIRE_CONFIG


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
