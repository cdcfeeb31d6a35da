from pydantic import BaseModel, EmailStr, Field, field_validator, validate_email
from pydantic_core import PydanticCustomError
from datetime import datetime

class RegisterIn(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr  # email-validator caps addresses at 254 chars
    password: str = Field(min_length=6, max_length=72)  # bcrypt ignores anything past 72 bytes

class LoginIn(BaseModel):
    # plain str: a malformed address must fail like any other unknown email
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        # same normalization EmailStr applies at registration (lowercased domain)
        try:
            return validate_email(value)[1]
        except PydanticCustomError:
            return value

class AuthOut(BaseModel):
    token: str
    token_type: str = "bearer"
    username: str
    email: str
    expires_at: datetime
