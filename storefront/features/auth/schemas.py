"""
Auth Schemas
인증 관련 Request/Response 스키마
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ...domain.models.user import UserRole

PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters and include at least one uppercase letter, "
    "one lowercase letter, and one number"
)
_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}$", re.DOTALL)


def validate_password_policy(password: str) -> str:
    """비밀번호 정책 검증 (8자 이상, 대/소문자, 숫자 포함)"""
    if not _PASSWORD_PATTERN.match(password):
        raise ValueError(PASSWORD_POLICY_MESSAGE)
    return password


def validate_password_confirm(confirm: str, info: ValidationInfo, field: str = "password") -> str:
    """비밀번호 확인 값 일치 검증 (원본 필드 검증 실패 시 생략)"""
    password = info.data.get(field)
    if password is not None and confirm != password:
        raise ValueError("Passwords do not match")
    return confirm


class CamelModel(BaseModel):
    """camelCase JSON <-> snake_case 필드 공통 베이스"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ==================== Request Schemas ====================


class SignupRequest(CamelModel):
    """회원가입 요청"""

    first_name: str = Field(..., min_length=2, max_length=100, examples=["Jane"])
    last_name: str = Field(..., min_length=2, max_length=100, examples=["Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["SecurePass123"])
    password_confirm: str = Field(..., examples=["SecurePass123"])

    @field_validator("password")
    @classmethod
    def check_password_policy(cls, v: str) -> str:
        return validate_password_policy(v)

    @field_validator("password_confirm")
    @classmethod
    def check_password_confirm(cls, v: str, info: ValidationInfo) -> str:
        return validate_password_confirm(v, info)


class LoginRequest(CamelModel):
    """로그인 요청"""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=1, examples=["SecurePass123"])


# ==================== Response Schemas ====================


class UserPublic(CamelModel):
    """
    사용자 공개 정보

    password_digest 등 민감 필드는 포함하지 않는다.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    role: UserRole


class UserProfile(UserPublic):
    """사용자 프로필 (생성 시각 포함)"""

    created_at: Optional[datetime] = None


class UserData(BaseModel):
    """data.user 래퍼"""

    user: UserPublic


class AuthResponse(BaseModel):
    """인증 응답 (토큰 + 사용자 정보)"""

    status: str = "success"
    token: str
    data: UserData


class CurrentUserResponse(BaseModel):
    """현재 사용자 응답"""

    status: str = "success"
    data: UserData


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    status: str = "success"
    message: str
