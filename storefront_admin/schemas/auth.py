from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SessionUser(BaseModel):
    id: str
    email: str
    name: str
    isAdmin: bool

    @classmethod
    def from_user(cls, user):
        return cls(id=user.id, email=user.email, name=user.name, isAdmin=user.is_admin)


class LoginResponse(BaseModel):
    token: str
    user: SessionUser
