"""
User Schemas
사용자 프로필/관리자 API 스키마
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from ...domain.models.user import UserRole
from ..auth.schemas import (
    CamelModel,
    UserProfile,
    validate_password_confirm,
    validate_password_policy,
)

ROLE_ERROR_MESSAGE = "Role must be either customer or admin"


# ==================== Request Schemas ====================


class UpdateProfileRequest(CamelModel):
    """프로필 수정 요청 (모든 필드 선택)"""

    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None


class UpdatePasswordRequest(CamelModel):
    """비밀번호 변경 요청"""

    current_password: str = Field(..., min_length=1)
    new_password: str
    password_confirm: str

    @field_validator("new_password")
    @classmethod
    def check_password_policy(cls, v: str) -> str:
        return validate_password_policy(v)

    @field_validator("password_confirm")
    @classmethod
    def check_password_confirm(cls, v: str, info: ValidationInfo) -> str:
        return validate_password_confirm(v, info, field="new_password")


class ForgotPasswordRequest(CamelModel):
    """비밀번호 재설정 토큰 요청"""

    email: EmailStr


class ResetPasswordRequest(CamelModel):
    """비밀번호 재설정 요청"""

    token: str = Field(..., min_length=1)
    password: str
    password_confirm: str

    @field_validator("password")
    @classmethod
    def check_password_policy(cls, v: str) -> str:
        return validate_password_policy(v)

    @field_validator("password_confirm")
    @classmethod
    def check_password_confirm(cls, v: str, info: ValidationInfo) -> str:
        return validate_password_confirm(v, info)


class UpdateRoleRequest(CamelModel):
    """
    역할 변경 요청 (관리자)

    역할 문자열은 여기서 한 번만 UserRole 로 파싱된다.
    """

    role: UserRole

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v):
        try:
            return UserRole(v)
        except ValueError:
            raise ValueError(ROLE_ERROR_MESSAGE)


# ==================== Response Schemas ====================


class ProfileData(BaseModel):
    user: UserProfile


class ProfileResponse(BaseModel):
    """단일 사용자 응답"""

    status: str = "success"
    data: ProfileData


class ProfileWithTokenResponse(ProfileResponse):
    """비밀번호 변경 응답 (새 토큰 포함)"""

    token: str


class UserListData(BaseModel):
    users: List[UserProfile]


class UserListResponse(BaseModel):
    """사용자 목록 응답 (관리자)"""

    status: str = "success"
    results: int
    data: UserListData


class ForgotPasswordResponse(CamelModel):
    """
    재설정 토큰 발급 응답

    reset_url / token 은 개발 모드에서만 포함된다.
    """

    status: str = "success"
    message: str = "Token sent to email"
    reset_url: Optional[str] = None
    token: Optional[str] = None
