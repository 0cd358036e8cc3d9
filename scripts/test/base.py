"""
공통 베이스 클래스 및 헬퍼 함수

모든 API 테스트 클래스는 BaseAPITester를 상속받아 사용합니다.
client / db_session fixture는 autouse fixture로 self에 연결됩니다.
"""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union

import httpx
import pytest
from sqlalchemy import update

from app.models import User
from app.models.auth import UserRoleType

TEST_PASSWORD = "testpassword123"


@dataclass
class TestUser:
    id: str
    email: str
    token: str

    __test__ = False

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class BaseAPITester:
    """모든 API 테스트의 베이스 클래스"""

    @pytest.fixture(autouse=True)
    def _bind_fixtures(self, client, db_session, storage_root):
        self.client = client
        self.db = db_session
        self.storage_root = storage_root

    # ------------------------------------------------------------------
    # 사용자 준비
    # ------------------------------------------------------------------

    def create_user(
        self,
        first_name: Optional[str] = "Test",
        last_name: Optional[str] = "User",
        email: Optional[str] = None,
    ) -> TestUser:
        """회원가입 API로 사용자 생성 후 access token 보관"""
        email = email or f"user_{uuid.uuid4().hex[:10]}@test.com"
        payload = {"email": email, "password": TEST_PASSWORD}
        if first_name is not None:
            payload["first_name"] = first_name
        if last_name is not None:
            payload["last_name"] = last_name

        data = self.assert_response(
            self.client.post("/auth/signup", json=payload),
            201,
            required_fields=["access_token", "user"],
        )
        return TestUser(id=data["user"]["id"], email=email, token=data["access_token"])

    def create_admin(self, first_name: str = "Admin", last_name: str = "User") -> TestUser:
        """가입 후 DB에서 role을 admin으로 변경 (권한은 매 요청 DB에서 읽음)"""
        admin = self.create_user(first_name=first_name, last_name=last_name)
        self.db.execute(
            update(User).where(User.id == uuid.UUID(admin.id)).values(role=UserRoleType.ADMIN)
        )
        self.db.commit()
        return admin

    # ------------------------------------------------------------------
    # 데이터 준비
    # ------------------------------------------------------------------

    @staticmethod
    def iso(dt: datetime) -> str:
        return dt.isoformat()

    def event_payload(self, **overrides: Any) -> Dict[str, Any]:
        start = datetime.now(timezone.utc) + timedelta(days=7)
        payload = {
            "title": f"Founder Meetup {uuid.uuid4().hex[:6]}",
            "description": "Monthly meetup",
            "start_datetime": self.iso(start),
            "end_datetime": self.iso(start + timedelta(hours=2)),
            "location_type": "physical",
            "physical_address": "1 Main St",
            "event_type": "networking",
            "is_public": True,
        }
        payload.update(overrides)
        return payload

    def create_event(self, admin: TestUser, **overrides: Any) -> Dict[str, Any]:
        return self.assert_response(
            self.client.post("/v1/admin/events", json=self.event_payload(**overrides), headers=admin.headers),
            201,
            required_fields=["id", "attendees_count"],
        )

    # ------------------------------------------------------------------
    # 응답 검증
    # ------------------------------------------------------------------

    def assert_response(
        self,
        response: httpx.Response,
        expected_status: int,
        required_fields: Optional[List[str]] = None,
        error_message: Optional[str] = None,
    ) -> Any:
        """
        응답 검증 헬퍼

        Args:
            response: TestClient 응답 객체
            expected_status: 예상 HTTP 상태 코드
            required_fields: 응답에 포함되어야 하는 필드 목록
            error_message: 커스텀 에러 메시지

        Returns:
            응답 JSON 데이터 (204면 빈 dict)
        """
        if response.status_code != expected_status:
            msg = error_message or f"예상 상태 코드 {expected_status}, 실제 {response.status_code}"
            raise AssertionError(f"{msg}\n{response.text[:500]}")

        if expected_status == 204:
            return {}

        try:
            data = response.json()
        except json.JSONDecodeError:
            raise AssertionError(f"응답이 JSON 형식이 아닙니다: {response.text[:200]}")

        if required_fields:
            missing_fields = [field for field in required_fields if field not in data]
            if missing_fields:
                raise AssertionError(f"필수 필드가 누락되었습니다: {missing_fields}")

        return data

    def assert_error_response(
        self,
        response: httpx.Response,
        expected_status: int,
        expected_error_type: Optional[str] = None,
        expected_message_contains: Optional[Union[str, List[str]]] = None,
    ) -> Dict[str, Any]:
        """
        에러 응답 검증 헬퍼

        - AppException 응답: {"error": <클래스명>, "message": ..., "detail": ...}
        - HTTPException 응답: {"detail": ...}
        """
        if response.status_code != expected_status:
            raise AssertionError(
                f"예상 에러 상태 코드 {expected_status}, 실제 {response.status_code}\n"
                f"{response.text[:500]}"
            )

        data = response.json()

        if expected_error_type:
            assert data.get("error") == expected_error_type, (
                f"예상 에러 타입 '{expected_error_type}'이 응답에 없습니다. "
                f"응답: {json.dumps(data, ensure_ascii=False)}"
            )

        if expected_message_contains:
            keywords = (
                expected_message_contains
                if isinstance(expected_message_contains, list)
                else [expected_message_contains]
            )
            error_text = json.dumps(data, ensure_ascii=False).lower()
            assert any(str(kw).lower() in error_text for kw in keywords), (
                f"에러 메시지에 '{expected_message_contains}'가 포함되어 있지 않습니다.\n"
                f"응답: {error_text[:300]}"
            )

        return data
