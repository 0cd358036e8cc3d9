"""
이벤트 API 테스트

테스트 항목:
- POST /v1/admin/events - 이벤트 생성 (관리자)
- GET /v1/events - 목록 / 검색 / 카테고리 필터
- GET /v1/events/upcoming, /past, /popular
- GET /v1/events/categories
- GET /v1/events/calendar - 로그인 시 is_registered 표시
- GET /v1/events/{event_id}
- PATCH /v1/admin/events/{event_id}, DELETE /v1/admin/events/{event_id}
"""

import uuid
from datetime import datetime, timedelta, timezone

from scripts.test.base import BaseAPITester


class TestEventAPI(BaseAPITester):
    """이벤트 조회/관리 API 테스트"""

    def test_create_event(self):
        """관리자 이벤트 생성 - attendees_count 0에서 시작"""
        admin = self.create_admin()
        data = self.create_event(admin, title="Demo Day", event_type="pitch", highlights=["Pitches", "Drinks"])

        assert data["title"] == "Demo Day"
        assert data["attendees_count"] == 0
        assert data["created_by"] == admin.id
        assert data["highlights"] == ["Pitches", "Drinks"]
        assert data["location_label"] == "1 Main St"

    def test_create_event_requires_admin(self):
        user = self.create_user()
        response = self.client.post("/v1/admin/events", json=self.event_payload(), headers=user.headers)
        self.assert_error_response(response, 403, expected_message_contains="admin")

    def test_create_event_rejects_unknown_type(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/admin/events", json=self.event_payload(event_type="party"), headers=admin.headers
        )
        assert response.status_code == 422

    def test_create_event_rejects_reversed_range(self):
        admin = self.create_admin()
        start = datetime.now(timezone.utc) + timedelta(days=3)
        payload = self.event_payload(
            start_datetime=self.iso(start), end_datetime=self.iso(start - timedelta(hours=1))
        )
        response = self.client.post("/v1/admin/events", json=payload, headers=admin.headers)
        assert response.status_code == 422

    def test_list_and_get_event(self):
        admin = self.create_admin()
        event = self.create_event(admin)

        events = self.assert_response(self.client.get("/v1/events"), 200)
        assert [e["id"] for e in events] == [event["id"]]

        data = self.assert_response(self.client.get(f"/v1/events/{event['id']}"), 200)
        assert data["title"] == event["title"]

    def test_get_missing_event(self):
        response = self.client.get(f"/v1/events/{uuid.uuid4()}")
        self.assert_error_response(response, 404, expected_error_type="NotFoundError")

    def test_filter_events(self):
        """search는 제목/설명 대소문자 무시, event_type=all은 필터 없음"""
        admin = self.create_admin()
        workshop = self.create_event(admin, title="Python Workshop", event_type="workshop")
        self.create_event(admin, title="Investor Mixer", description="Meet angels", event_type="networking")

        data = self.assert_response(self.client.get("/v1/events", params={"search": "python"}), 200)
        assert [e["id"] for e in data] == [workshop["id"]]

        data = self.assert_response(self.client.get("/v1/events", params={"search": "ANGELS"}), 200)
        assert [e["title"] for e in data] == ["Investor Mixer"]

        data = self.assert_response(self.client.get("/v1/events", params={"event_type": "workshop"}), 200)
        assert [e["id"] for e in data] == [workshop["id"]]

        data = self.assert_response(self.client.get("/v1/events", params={"event_type": "all"}), 200)
        assert len(data) == 2

    def test_upcoming_and_past(self):
        admin = self.create_admin()
        now = datetime.now(timezone.utc)
        past = self.create_event(
            admin,
            title="Last Month",
            start_datetime=self.iso(now - timedelta(days=30)),
            end_datetime=self.iso(now - timedelta(days=30) + timedelta(hours=2)),
        )
        upcoming = self.create_event(admin, title="Next Week")

        data = self.assert_response(self.client.get("/v1/events/upcoming"), 200)
        assert [e["id"] for e in data] == [upcoming["id"]]

        data = self.assert_response(self.client.get("/v1/events/past"), 200)
        assert [e["id"] for e in data] == [past["id"]]

    def test_popular_events(self):
        """참석자 수 많은 순"""
        admin = self.create_admin()
        self.create_event(admin, title="Quiet")
        busy = self.create_event(admin, title="Busy")
        for _ in range(2):
            attendee = self.create_user()
            self.assert_response(
                self.client.post(f"/v1/events/{busy['id']}/register", headers=attendee.headers), 201
            )

        data = self.assert_response(self.client.get("/v1/events/popular", params={"limit": 1}), 200)
        assert [e["id"] for e in data] == [busy["id"]]
        assert data[0]["attendees_count"] == 2

    def test_categories(self):
        data = self.assert_response(
            self.client.get("/v1/events/categories"), 200, required_fields=["event_types", "location_types"]
        )
        ids = [t["id"] for t in data["event_types"]]
        assert "workshop" in ids and "pitch" in ids
        assert {t["id"] for t in data["location_types"]} == {"virtual", "physical", "hybrid"}

    def test_calendar_marks_registered_events(self):
        """GET /v1/events/calendar - 로그인 사용자의 등록 여부 표시"""
        admin = self.create_admin()
        user = self.create_user()
        registered = self.create_event(admin, title="Registered")
        other = self.create_event(admin, title="Other")
        self.assert_response(
            self.client.post(f"/v1/events/{registered['id']}/register", headers=user.headers), 201
        )

        now = datetime.now(timezone.utc)
        params = {"start": self.iso(now), "end": self.iso(now + timedelta(days=30))}

        data = self.assert_response(self.client.get("/v1/events/calendar", params=params, headers=user.headers), 200)
        flags = {e["id"]: e["is_registered"] for e in data}
        assert flags == {registered["id"]: True, other["id"]: False}

        anonymous = self.assert_response(self.client.get("/v1/events/calendar", params=params), 200)
        assert all(e["is_registered"] is False for e in anonymous)

    def test_calendar_rejects_reversed_range(self):
        now = datetime.now(timezone.utc)
        params = {"start": self.iso(now), "end": self.iso(now - timedelta(days=1))}
        response = self.client.get("/v1/events/calendar", params=params)
        self.assert_error_response(response, 400, expected_error_type="ValidationError")

    def test_update_event(self):
        """PATCH - 보낸 필드만 변경"""
        admin = self.create_admin()
        event = self.create_event(admin, title="Before")

        data = self.assert_response(
            self.client.patch(
                f"/v1/admin/events/{event['id']}",
                json={"title": "After", "location_type": "virtual", "virtual_meeting_url": "https://meet.test/x"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["title"] == "After"
        assert data["description"] == event["description"]
        assert data["location_label"] == "Virtual Event"

    def test_update_event_rejects_reversed_range(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        start = datetime.fromisoformat(event["start_datetime"])
        response = self.client.patch(
            f"/v1/admin/events/{event['id']}",
            json={"end_datetime": self.iso(start - timedelta(days=1))},
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_error_type="ValidationError")

    def test_update_event_rejects_null_dates(self):
        """NOT NULL 필드에 명시적 null은 422, 이벤트는 그대로"""
        admin = self.create_admin()
        event = self.create_event(admin)

        for field in ("start_datetime", "end_datetime"):
            response = self.client.patch(
                f"/v1/admin/events/{event['id']}", json={field: None}, headers=admin.headers
            )
            assert response.status_code == 422
            assert "cannot be null" in response.text

        data = self.assert_response(self.client.get(f"/v1/events/{event['id']}"), 200)
        assert data["start_datetime"] == event["start_datetime"]
        assert data["end_datetime"] == event["end_datetime"]

    def test_update_event_rejects_null_title(self):
        admin = self.create_admin()
        event = self.create_event(admin, title="Keep me")

        for body in ({"title": None}, {"is_public": None}, {"event_type": None}, {"location_type": None}):
            response = self.client.patch(f"/v1/admin/events/{event['id']}", json=body, headers=admin.headers)
            assert response.status_code == 422

        assert self.assert_response(self.client.get(f"/v1/events/{event['id']}"), 200)["title"] == "Keep me"

    def test_update_event_allows_clearing_optional_fields(self):
        admin = self.create_admin()
        event = self.create_event(admin, description="Bring laptops")
        data = self.assert_response(
            self.client.patch(f"/v1/admin/events/{event['id']}", json={"description": None}, headers=admin.headers),
            200,
        )
        assert data["description"] is None
        assert data["title"] == event["title"]

    def test_delete_event(self):
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)
        self.assert_response(self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 201)

        self.assert_response(self.client.delete(f"/v1/admin/events/{event['id']}", headers=admin.headers), 204)
        self.assert_error_response(self.client.get(f"/v1/events/{event['id']}"), 404)

    def test_update_event_image_rejects_invalid_id(self):
        admin = self.create_admin()
        response = self.client.put(
            "/v1/admin/events/not-a-uuid/image",
            json={"image_url": "http://testserver/x.png"},
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_message_contains="invalid event id")

    def test_update_event_image_rejects_trailing_newline(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        response = self.client.put(
            f"/v1/admin/events/{event['id']}%0A/image",
            json={"image_url": "http://testserver/x.png"},
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_error_type="ValidationError")

    def test_update_event_image(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        data = self.assert_response(
            self.client.put(
                f"/v1/admin/events/{event['id']}/image",
                json={"image_url": "http://testserver/banner.png"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["image_url"] == "http://testserver/banner.png"
