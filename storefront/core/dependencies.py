"""
Core Dependencies
공통 의존성 주입 함수

협력 객체(설정, 해셔, JWT 관리자)는 애플리케이션 시작 시 한 번 생성되어
app.state 에 보관된다. 테스트에서는 dependency_overrides 로 교체한다.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.auth.jwt_manager import JWTManager
from storefront.core.auth.providers.credentials import CredentialsAuthProvider
from storefront.core.config import AuthConfig, Settings
from storefront.core.database import get_db
from storefront.domain.repositories import (
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    UserRepository,
)


def get_app_settings(request: Request) -> Settings:
    """애플리케이션 설정"""
    return request.app.state.settings


def get_auth_config(request: Request) -> AuthConfig:
    """인증 설정 (불변)"""
    return request.app.state.auth_config


def get_credentials_provider(request: Request) -> CredentialsAuthProvider:
    """비밀번호 해셔"""
    return request.app.state.credentials_provider


def get_jwt_manager(request: Request) -> JWTManager:
    """토큰 발급/검증기"""
    return request.app.state.jwt_manager


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """사용자 저장소"""
    return UserRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_db)) -> ProductRepository:
    """상품 저장소"""
    return ProductRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_db)) -> OrderRepository:
    """주문 저장소"""
    return OrderRepository(db)


def get_payment_repository(db: AsyncSession = Depends(get_db)) -> PaymentRepository:
    """결제 저장소"""
    return PaymentRepository(db)
