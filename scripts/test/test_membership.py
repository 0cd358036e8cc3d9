"""
회원/가입 신청 API 테스트

테스트 항목:
- POST /v1/membership/applications - 가입 신청 (항상 pending)
- GET /v1/membership/applications/me - 내 신청 상태
- GET /v1/admin/membership/applications - 신청 목록 (관리자)
- POST /v1/admin/membership/applications/{id}/approve - 승인 + 회원 생성
- POST /v1/admin/membership/applications/{id}/reject - 거절
- /v1/members - 회원 조회/생성/수정/삭제
"""

import uuid

from scripts.test.base import BaseAPITester


class TestMembershipAPI(BaseAPITester):
    """가입 신청 및 회원 관리 테스트"""

    def _apply(self, user, **overrides):
        payload = {"department": "CS", "year_of_study": "3", "interests": "AI, fintech"}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/membership/applications", json=payload, headers=user.headers),
            201,
            required_fields=["id", "status"],
        )

    def test_application_status_without_application(self):
        """신청 내역이 없으면 has_applied False, status None"""
        user = self.create_user()
        data = self.assert_response(
            self.client.get("/v1/membership/applications/me", headers=user.headers), 200
        )
        assert data == {"has_applied": False, "status": None}

    def test_submit_application(self):
        user = self.create_user()
        application = self._apply(user)
        assert application["status"] == "pending"
        assert application["user_id"] == user.id

        data = self.assert_response(
            self.client.get("/v1/membership/applications/me", headers=user.headers), 200
        )
        assert data == {"has_applied": True, "status": "pending"}

    def test_list_applications(self):
        admin = self.create_admin()
        user = self.create_user(first_name="Jane", last_name="Doe")
        application = self._apply(user)

        data = self.assert_response(
            self.client.get("/v1/admin/membership/applications", headers=admin.headers), 200
        )
        assert [a["id"] for a in data] == [application["id"]]
        assert data[0]["applicant_name"] == "Jane Doe"
        assert data[0]["applicant_email"] == user.email

        self.assert_error_response(
            self.client.get("/v1/admin/membership/applications", headers=user.headers), 403
        )

    def test_approve_creates_member(self):
        """승인하면 standard/active 회원 생성, 두 번째 승인은 409"""
        admin = self.create_admin()
        user = self.create_user(first_name="Jane", last_name="Doe")
        application = self._apply(user)

        decision = self.assert_response(
            self.client.post(
                f"/v1/admin/membership/applications/{application['id']}/approve", headers=admin.headers
            ),
            200,
            required_fields=["member_id", "status"],
        )
        assert decision["status"] == "approved"

        member = self.assert_response(self.client.get("/v1/members/me", headers=user.headers), 200)
        assert member["id"] == decision["member_id"]
        assert member["membership_level"] == "standard"
        assert member["is_active"] is True
        assert member["first_name"] == "Jane"
        assert member["contact_email"] == user.email
        assert member["interests"] == "AI, fintech"

        again = self.client.post(
            f"/v1/admin/membership/applications/{application['id']}/approve", headers=admin.headers
        )
        self.assert_error_response(again, 409, expected_error_type="ConflictError")

        pending = self.assert_response(
            self.client.get(
                "/v1/admin/membership/applications", params={"pending_only": True}, headers=admin.headers
            ),
            200,
        )
        assert pending == []

    def test_approve_keeps_existing_member(self):
        """이미 회원인 사용자의 신청 승인은 기존 회원 유지"""
        admin = self.create_admin()
        user = self.create_user()
        existing = self.assert_response(
            self.client.post(
                "/v1/members", json={"user_id": user.id, "membership_level": "premium"}, headers=admin.headers
            ),
            201,
        )
        application = self._apply(user)

        decision = self.assert_response(
            self.client.post(
                f"/v1/admin/membership/applications/{application['id']}/approve", headers=admin.headers
            ),
            200,
        )
        assert decision["member_id"] == existing["id"]
        member = self.assert_response(self.client.get("/v1/members/me", headers=user.headers), 200)
        assert member["membership_level"] == "premium"

    def test_reject_application(self):
        admin = self.create_admin()
        user = self.create_user()
        application = self._apply(user)

        decision = self.assert_response(
            self.client.post(
                f"/v1/admin/membership/applications/{application['id']}/reject", headers=admin.headers
            ),
            200,
        )
        assert decision["status"] == "rejected"
        assert decision["member_id"] is None

        status = self.assert_response(self.client.get("/v1/membership/applications/me", headers=user.headers), 200)
        assert status["status"] == "rejected"

        self.assert_error_response(self.client.get("/v1/members/me", headers=user.headers), 404)

        approve = self.client.post(
            f"/v1/admin/membership/applications/{application['id']}/approve", headers=admin.headers
        )
        self.assert_error_response(approve, 409)

    def test_approve_missing_application(self):
        admin = self.create_admin()
        response = self.client.post(
            f"/v1/admin/membership/applications/{uuid.uuid4()}/approve", headers=admin.headers
        )
        self.assert_error_response(response, 404)

    def test_create_member_conflict(self):
        admin = self.create_admin()
        user = self.create_user()
        self.assert_response(self.client.post("/v1/members", json={"user_id": user.id}, headers=admin.headers), 201)
        response = self.client.post("/v1/members", json={"user_id": user.id}, headers=admin.headers)
        self.assert_error_response(response, 409, expected_message_contains="already a member")

    def test_members_by_industry(self):
        admin = self.create_admin()
        fintech = self.create_user()
        health = self.create_user()
        self.client.post("/v1/members", json={"user_id": fintech.id, "industry": "fintech"}, headers=admin.headers)
        self.client.post("/v1/members", json={"user_id": health.id, "industry": "health"}, headers=admin.headers)

        all_members = self.assert_response(self.client.get("/v1/members", headers=admin.headers), 200)
        assert len(all_members) == 2

        filtered = self.assert_response(
            self.client.get("/v1/members", params={"industry": "fintech"}, headers=admin.headers), 200
        )
        assert [m["user_id"] for m in filtered] == [fintech.id]

        by_user = self.assert_response(self.client.get(f"/v1/members/by-user/{health.id}", headers=admin.headers), 200)
        assert by_user["industry"] == "health"

    def test_update_member_self_or_admin(self):
        admin = self.create_admin()
        owner = self.create_user()
        other = self.create_user()
        member = self.assert_response(
            self.client.post("/v1/members", json={"user_id": owner.id}, headers=admin.headers), 201
        )

        forbidden = self.client.patch(f"/v1/members/{member['id']}", json={"bio": "x"}, headers=other.headers)
        self.assert_error_response(forbidden, 403)

        data = self.assert_response(
            self.client.patch(f"/v1/members/{member['id']}", json={"bio": "Building things"}, headers=owner.headers),
            200,
        )
        assert data["bio"] == "Building things"

    def test_delete_member(self):
        admin = self.create_admin()
        user = self.create_user()
        member = self.assert_response(
            self.client.post("/v1/members", json={"user_id": user.id}, headers=admin.headers), 201
        )
        self.assert_error_response(self.client.delete(f"/v1/members/{member['id']}", headers=user.headers), 403)
        self.assert_response(self.client.delete(f"/v1/members/{member['id']}", headers=admin.headers), 204)
        self.assert_error_response(self.client.get("/v1/members/me", headers=user.headers), 404)
