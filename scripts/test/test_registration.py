"""
이벤트 등록 API 테스트

테스트 항목:
- POST /v1/events/{event_id}/register - 등록 (중복 등록은 기존 등록 반환)
- DELETE /v1/events/{event_id}/register - 등록 취소
- GET /v1/events/{event_id}/registration - 등록 여부
- GET /v1/admin/events/{event_id}/registrations - 등록 목록 (관리자)
- PATCH /v1/admin/registrations/{registration_id} - 상태 변경 (관리자)
"""

import uuid

from scripts.test.base import BaseAPITester


class TestRegistrationAPI(BaseAPITester):
    """이벤트 등록/취소 테스트"""

    def _event_count(self, event_id: str) -> int:
        return self.assert_response(self.client.get(f"/v1/events/{event_id}"), 200)["attendees_count"]

    def test_register_is_idempotent(self):
        """같은 사용자가 두 번 등록해도 등록 1건, 카운트 1"""
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)
        assert self._event_count(event["id"]) == 0

        first = self.assert_response(
            self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers),
            201,
            required_fields=["registration_id", "created", "attendees_count"],
        )
        assert first["created"] is True
        assert first["attendees_count"] == 1

        second = self.assert_response(
            self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 200
        )
        assert second["created"] is False
        assert second["registration_id"] == first["registration_id"]
        assert second["attendees_count"] == 1
        assert self._event_count(event["id"]) == 1

    def test_cancel_registration(self):
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)
        self.assert_response(self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 201)

        data = self.assert_response(
            self.client.delete(f"/v1/events/{event['id']}/register", headers=user.headers), 200
        )
        assert data["attendees_count"] == 0
        assert self._event_count(event["id"]) == 0

        status = self.assert_response(
            self.client.get(f"/v1/events/{event['id']}/registration", headers=user.headers), 200
        )
        assert status["is_registered"] is False

    def test_cancel_without_registration(self):
        """등록하지 않은 이벤트 취소는 404, 카운트는 그대로"""
        admin = self.create_admin()
        registered = self.create_user()
        stranger = self.create_user()
        event = self.create_event(admin)
        self.assert_response(
            self.client.post(f"/v1/events/{event['id']}/register", headers=registered.headers), 201
        )

        response = self.client.delete(f"/v1/events/{event['id']}/register", headers=stranger.headers)
        self.assert_error_response(response, 404, expected_message_contains="registration not found")
        assert self._event_count(event["id"]) == 1

    def test_register_for_missing_event(self):
        user = self.create_user()
        response = self.client.post(f"/v1/events/{uuid.uuid4()}/register", headers=user.headers)
        self.assert_error_response(response, 404, expected_error_type="NotFoundError")

    def test_register_requires_login(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        self.assert_error_response(self.client.post(f"/v1/events/{event['id']}/register"), 401)

    def test_registration_status(self):
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)

        before = self.assert_response(
            self.client.get(f"/v1/events/{event['id']}/registration", headers=user.headers), 200
        )
        assert before["is_registered"] is False

        self.assert_response(self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 201)
        after = self.assert_response(
            self.client.get(f"/v1/events/{event['id']}/registration", headers=user.headers), 200
        )
        assert after["is_registered"] is True

    def test_company_defaults_to_profile(self):
        """body 없이 등록하면 프로필 회사명 사용"""
        admin = self.create_admin()
        user = self.create_user(first_name="Linus", last_name="T")
        self.assert_response(self.client.patch("/auth/me", json={"company": "Acme"}, headers=user.headers), 200)
        event = self.create_event(admin)

        self.assert_response(self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 201)

        registrations = self.assert_response(
            self.client.get(f"/v1/admin/events/{event['id']}/registrations", headers=admin.headers), 200
        )
        assert len(registrations) == 1
        assert registrations[0]["user_company"] == "Acme"
        assert registrations[0]["user_name"] == "Linus T"
        assert registrations[0]["user_email"] == user.email
        assert registrations[0]["status"] == "registered"

    def test_update_registration_status(self):
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)
        result = self.assert_response(
            self.client.post(
                f"/v1/events/{event['id']}/register", json={"user_company": "Globex"}, headers=user.headers
            ),
            201,
        )

        data = self.assert_response(
            self.client.patch(
                f"/v1/admin/registrations/{result['registration_id']}",
                json={"status": "attended"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["status"] == "attended"
        assert data["user_company"] == "Globex"

        attended = self.assert_response(
            self.client.get(
                f"/v1/admin/events/{event['id']}/registrations",
                params={"status": "attended"},
                headers=admin.headers,
            ),
            200,
        )
        assert [r["id"] for r in attended] == [result["registration_id"]]

        canceled = self.assert_response(
            self.client.get(
                f"/v1/admin/events/{event['id']}/registrations",
                params={"status": "canceled"},
                headers=admin.headers,
            ),
            200,
        )
        assert canceled == []
