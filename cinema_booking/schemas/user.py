from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


# Properties to receive via API on creation (POST /auth/register)
class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)


# Properties to receive via API on admin creation (POST /auth/admin/register)
class AdminCreate(UserCreate):
    admin_secret: str


# Properties returned via API
class User(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user: User
