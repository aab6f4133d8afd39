# backend/fintrack/auth/schemas.py

from pydantic import BaseModel, EmailStr, Field


class RegisterSchema(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)


class LoginSchema(BaseModel):
    username: str = Field(min_length=1, description="Username is required")
    password: str = Field(min_length=1, description="Password is required")
