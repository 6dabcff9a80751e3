"""
User Model
사용자 ORM 모델
"""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database.base import Base


class UserRole(str, enum.Enum):
    """
    사용자 역할 (단일 정규 표현)

    요청 역직렬화 시점에 한 번만 파싱되며, 이후 비교는 enum 동등 비교만 사용한다.
    """

    CUSTOMER = "customer"
    ADMIN = "admin"


class User(Base):
    """
    사용자 모델

    Attributes:
        id: 사용자 ID (Primary Key)
        first_name / last_name: 이름
        email: 이메일 (Unique, 소문자 정규화)
        password_digest: 비밀번호 해시 (응답에 절대 포함하지 않음)
        role: 사용자 역할 (customer, admin)
        reset_password_token: 재설정 토큰의 sha256 해시
        reset_password_expires: 재설정 토큰 만료 시각
        created_at / updated_at: 타임스탬프
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=UserRole.CUSTOMER,
        nullable=False,
    )

    # 비밀번호 재설정
    reset_password_token: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, index=True
    )
    reset_password_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )

    # 타임스탬프
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        # password_digest 는 repr 에도 노출하지 않는다
        return f"<User(id={self.id}, email={self.email}, role={self.role.value if self.role else None})>"
