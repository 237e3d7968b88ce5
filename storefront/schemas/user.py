from pydantic import BaseModel, EmailStr, Field


class RegisterUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserSummary(BaseModel):
    """Public view of a user record; never carries the password hash."""
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user) -> "UserSummary":
        return cls(id=str(user.id), name=user.name, email=user.email)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserSummary
