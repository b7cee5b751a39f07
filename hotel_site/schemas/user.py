from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


class SignUp(BaseModel):
    full_name: str
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str

    @field_validator("full_name")
    @classmethod
    def full_name_length(cls, value: str):
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Nama minimal 2 karakter")
        return value

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Password tidak cocok")
        return self


class SignIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=6)
    new_password: str = Field(min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Password baru tidak cocok")
        return self


class UserOut(BaseModel):
    id: str
    email: str

    model_config = {"from_attributes": True}


class SessionOut(BaseModel):
    user: Optional[UserOut] = None
    is_admin: bool = False


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    is_admin: bool
