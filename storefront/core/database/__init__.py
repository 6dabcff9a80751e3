"""
Database Module
SQLAlchemy 비동기 데이터베이스 설정
"""

from .base import Base
from .session import check_connection, create_engine, create_session_factory, get_db

__all__ = ["Base", "check_connection", "create_engine", "create_session_factory", "get_db"]
