"""
Error Response Schemas
에러 응답 스키마
"""

from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorResponse(BaseModel):
    """
    표준 에러 응답

    모든 API 에러는 이 형식으로 반환됩니다.
    status: 예상된 오류는 "fail", 예상치 못한 오류는 "error"
    """

    status: str = Field(..., description="fail | error")
    message: str = Field(..., description="사용자 친화적 에러 메시지")
    error_code: Optional[str] = Field(None, description="에러 코드 (예: AUTH_001)")
    request_id: Optional[str] = Field(None, description="요청 추적 ID")
    error: Optional[Dict[str, Any]] = Field(
        None, description="예외 상세 정보 (개발 모드 전용)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "fail",
                "message": "Incorrect email or password",
                "error_code": "AUTH_001",
                "request_id": "5f0c6f1e8b8a4c55b6d0a7c1c3d2e9f4",
            }
        }
    )

    @field_validator("error_code", mode="before")
    @classmethod
    def unwrap_error_code(cls, v: Any) -> Any:
        """ErrorCode enum 을 문자열 값으로 변환"""
        return v.value if isinstance(v, Enum) else v

    def to_content(self) -> Dict[str, Any]:
        """None 필드를 제외한 JSON 직렬화 결과"""
        return self.model_dump(mode="json", exclude_none=True)
