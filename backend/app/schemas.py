from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel
from typing import Optional
import datetime


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserRegister(ApiModel):
    name: Optional[str] = None
    email: EmailStr
    password: Optional[str] = None
    role: Optional[str] = None


class UserLogin(ApiModel):
    email: str
    password: str


class UserSummary(ApiModel):
    id: int
    name: str
    email: str


class User(UserSummary):
    role: str
    created_at: datetime.datetime


class TokenResponse(ApiModel):
    token: str
    user: User
