# backend/schemas/user.py
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

# Schema for user registration requests; presence is checked by the route
# so that a missing field answers 400 with a readable message
class UserCreate(BaseModel):
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "nome"))
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "senha"))

# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "senha"))

# Public user profile; the password hash never leaves the server
class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)

# Login result: the profile plus the bearer token that identifies the session
class LoginResponse(UserResponse):
    access_token: str
    token_type: str = "bearer"
