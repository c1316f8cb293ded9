from pydantic import BaseModel, EmailStr, Field


class UserSignup(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = ""


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ResetPasswordRequest(BaseModel):
    email: str


class UserOut(BaseModel):
    id: str
    email: str
    name: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class FollowRequest(BaseModel):
    targetUserId: str = ""


class FollowingUser(BaseModel):
    id: str
    name: str
    email: str
    bio: str = ""
    publicIdeasCount: int = 0


class ProfileUpdate(BaseModel):
    bio: str = ""
