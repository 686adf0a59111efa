# model/api.py
from pydantic import BaseModel, Field
from model.account import Account


class UsernameCheckResponse(BaseModel):
    available: bool


class UsernameSetRequest(BaseModel):
    username: str = Field(min_length=1)


class UsernameSetResponse(BaseModel):
    account: Account


class CacheCountResponse(BaseModel):
    count: int


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str
