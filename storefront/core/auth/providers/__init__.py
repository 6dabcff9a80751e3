"""
Authentication Providers
비밀번호 인증 등
"""

from .credentials import CredentialsAuthProvider

__all__ = ["CredentialsAuthProvider"]
