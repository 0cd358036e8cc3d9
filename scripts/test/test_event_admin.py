"""
관리자 이벤트 도구 API 테스트

테스트 항목:
- POST /v1/admin/events/{event_id}/duplicate - 복제
- GET /v1/admin/events/{event_id}/statistics - 단일 이벤트 통계
- GET /v1/admin/events/stats - 전체 요약
- POST /v1/admin/events/bulk-update, /bulk-delete - 일괄 처리
- GET /v1/admin/events/export - CSV 다운로드
- POST /v1/admin/events/image - 이미지 업로드
"""

import uuid
from datetime import datetime, timedelta, timezone

from scripts.test.base import BaseAPITester


class TestEventAdminAPI(BaseAPITester):
    """관리자 이벤트 도구 테스트"""

    def test_duplicate_event(self):
        """복제본은 "Copy of " 제목, 참석자 0, 나머지 필드 동일"""
        admin = self.create_admin()
        user = self.create_user()
        source = self.create_event(admin, title="Pitch Night", event_type="pitch", highlights=["Demo"])
        self.assert_response(self.client.post(f"/v1/events/{source['id']}/register", headers=user.headers), 201)

        copy = self.assert_response(
            self.client.post(f"/v1/admin/events/{source['id']}/duplicate", headers=admin.headers), 201
        )
        assert copy["id"] != source["id"]
        assert copy["title"] == "Copy of Pitch Night"
        assert copy["attendees_count"] == 0
        assert copy["event_type"] == "pitch"
        assert copy["highlights"] == ["Demo"]
        assert copy["physical_address"] == source["physical_address"]
        assert copy["start_datetime"] == source["start_datetime"]

    def test_duplicate_missing_event(self):
        admin = self.create_admin()
        response = self.client.post(f"/v1/admin/events/{uuid.uuid4()}/duplicate", headers=admin.headers)
        self.assert_error_response(response, 404)

    def test_event_statistics(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        for company in ["Acme", "Acme", "Globex", None]:
            attendee = self.create_user()
            body = {"user_company": company} if company else None
            self.assert_response(
                self.client.post(f"/v1/events/{event['id']}/register", json=body, headers=attendee.headers), 201
            )

        data = self.assert_response(
            self.client.get(f"/v1/admin/events/{event['id']}/statistics", headers=admin.headers),
            200,
            required_fields=["event", "total_registered", "unique_companies", "registrations_by_date"],
        )
        assert data["total_registered"] == 4
        assert data["unique_companies"] == 2
        assert sum(data["registrations_by_date"].values()) == 4
        assert data["event"]["attendees_count"] == 4

    def test_overview_stats(self):
        admin = self.create_admin()
        user = self.create_user()
        now = datetime.now(timezone.utc)
        self.create_event(
            admin,
            start_datetime=self.iso(now - timedelta(days=2)),
            end_datetime=self.iso(now - timedelta(days=2) + timedelta(hours=1)),
        )
        upcoming = self.create_event(admin)
        self.assert_response(self.client.post(f"/v1/events/{upcoming['id']}/register", headers=user.headers), 201)

        data = self.assert_response(self.client.get("/v1/admin/events/stats", headers=admin.headers), 200)
        assert data == {"total_events": 2, "upcoming_events": 1, "past_events": 1, "total_attendees": 1}

    def test_bulk_update(self):
        admin = self.create_admin()
        first = self.create_event(admin, is_public=True)
        second = self.create_event(admin, is_public=True)
        missing = str(uuid.uuid4())

        data = self.assert_response(
            self.client.post(
                "/v1/admin/events/bulk-update",
                json={"event_ids": [first["id"], second["id"], missing], "updates": {"is_public": False}},
                headers=admin.headers,
            ),
            200,
        )
        assert data["updated_count"] == 2
        assert data["not_found_ids"] == [missing]

        for event_id in (first["id"], second["id"]):
            assert self.assert_response(self.client.get(f"/v1/events/{event_id}"), 200)["is_public"] is False

    def test_bulk_update_rejects_end_before_start(self):
        """종료 시간만 바꿔 시작보다 앞서게 되면 전체 거부, 어떤 이벤트도 변경 안 됨"""
        admin = self.create_admin()
        now = datetime.now(timezone.utc)
        early = self.create_event(
            admin,
            start_datetime=self.iso(now + timedelta(days=1)),
            end_datetime=self.iso(now + timedelta(days=1, hours=2)),
        )
        late = self.create_event(
            admin,
            start_datetime=self.iso(now + timedelta(days=10)),
            end_datetime=self.iso(now + timedelta(days=10, hours=2)),
        )

        response = self.client.post(
            "/v1/admin/events/bulk-update",
            json={
                "event_ids": [early["id"], late["id"]],
                "updates": {"end_datetime": self.iso(now + timedelta(days=5))},
            },
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_error_type="ValidationError")
        assert late["id"] in response.json()["detail"]
        assert early["id"] not in response.json()["detail"]

        for event in (early, late):
            data = self.assert_response(self.client.get(f"/v1/events/{event['id']}"), 200)
            assert data["end_datetime"] == event["end_datetime"]

    def test_bulk_update_rejects_null_fields(self):
        admin = self.create_admin()
        event = self.create_event(admin)
        response = self.client.post(
            "/v1/admin/events/bulk-update",
            json={"event_ids": [event["id"]], "updates": {"start_datetime": None}},
            headers=admin.headers,
        )
        assert response.status_code == 422

    def test_bulk_delete(self):
        admin = self.create_admin()
        first = self.create_event(admin)
        keep = self.create_event(admin)

        data = self.assert_response(
            self.client.post("/v1/admin/events/bulk-delete", json={"event_ids": [first["id"]]}, headers=admin.headers),
            200,
        )
        assert data["deleted_count"] == 1
        remaining = self.assert_response(self.client.get("/v1/events"), 200)
        assert [e["id"] for e in remaining] == [keep["id"]]

    def test_bulk_requires_ids(self):
        admin = self.create_admin()
        response = self.client.post("/v1/admin/events/bulk-delete", json={"event_ids": []}, headers=admin.headers)
        assert response.status_code == 422

    def test_export_csv(self):
        admin = self.create_admin()
        self.create_event(admin, title='The "Big" Meetup', description="Snacks", is_public=False)

        response = self.client.get("/v1/admin/events/export", headers=admin.headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == "attachment; filename=events.csv"

        lines = response.text.split("\n")
        assert lines[0] == (
            "Title,Description,Start Date,End Date,Event Type,Location Type,"
            "Physical Address,Virtual URL,Attendees Count,Is Public"
        )
        assert len(lines) == 2
        assert lines[1].startswith('"The ""Big"" Meetup","Snacks",')
        assert lines[1].endswith(',"1 Main St",,0,No')

    def test_export_csv_empty(self):
        admin = self.create_admin()
        response = self.client.get("/v1/admin/events/export", headers=admin.headers)
        assert response.status_code == 200
        assert response.text == ""

    def test_admin_tools_require_admin(self):
        user = self.create_user()
        self.assert_error_response(self.client.get("/v1/admin/events/export", headers=user.headers), 403)
        self.assert_error_response(self.client.get("/v1/admin/events/stats", headers=user.headers), 403)

    def test_upload_event_image_with_event_id(self):
        """유효한 event_id면 그 ID로 시작하는 키에 저장"""
        admin = self.create_admin()
        event = self.create_event(admin)

        data = self.assert_response(
            self.client.post(
                "/v1/admin/events/image",
                data={"event_id": event["id"]},
                files={"file": ("banner.jpg", b"jpeg-bytes", "image/jpeg")},
                headers=admin.headers,
            ),
            201,
            required_fields=["bucket", "path", "public_url"],
        )
        assert data["bucket"] == "events"
        assert data["path"].startswith(f"{event['id']}-")
        assert data["path"].endswith(".jpg")
        assert data["public_url"] == f"http://testserver/storage/v1/object/public/events/{data['path']}"

        served = self.client.get(f"/storage/v1/object/public/events/{data['path']}")
        assert served.status_code == 200
        assert served.content == b"jpeg-bytes"

    def test_upload_event_image_with_invalid_id(self):
        """UUID가 아닌 event_id는 무시하고 새 uuid4 키 사용"""
        admin = self.create_admin()
        data = self.assert_response(
            self.client.post(
                "/v1/admin/events/image",
                data={"event_id": "not-a-uuid"},
                files={"file": ("banner.png", b"png-bytes", "image/png")},
                headers=admin.headers,
            ),
            201,
        )
        assert not data["path"].startswith("not-a-uuid")
        key = data["path"].rsplit("-", 1)[0]
        assert uuid.UUID(key).version == 4

    def test_upload_event_image_rejects_non_image(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/admin/events/image",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_message_contains="unsupported file type")
