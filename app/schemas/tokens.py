# app/schemas/tokens.py
from pydantic import BaseModel
from app.schemas.user import UserOut


class LoginResponse(BaseModel):
    token: str
    user: UserOut


class RegisterResponse(LoginResponse):
    message: str
