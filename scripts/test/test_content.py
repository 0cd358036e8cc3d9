"""
콘텐츠 API 테스트

테스트 항목:
- /v1/success-stories - 성공 사례 (관리자 등록, 추천/최근)
- /v1/resources - 자료실 카테고리/자료 (조회 시 조회수 증가)
- /v1/recordings - 녹화본 (조회수, 통계, 썸네일)
"""

import uuid

from scripts.test.base import BaseAPITester


class TestSuccessStoryAPI(BaseAPITester):
    """성공 사례 테스트"""

    def _create_story(self, admin, **overrides):
        payload = {
            "company_name": "Acme",
            "founder": "Jane Doe",
            "description": "From dorm room to Series A",
            "achievements": ["Series A", "100 employees"],
            "year": 2024,
        }
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/success-stories", json=payload, headers=admin.headers), 201
        )

    def test_create_story_admin_only(self):
        admin = self.create_admin()
        user = self.create_user()

        story = self._create_story(admin)
        assert story["user_id"] == admin.id
        assert story["featured"] is False
        assert story["achievements"] == ["Series A", "100 employees"]

        response = self.client.post(
            "/v1/success-stories",
            json={"company_name": "X", "founder": "Y", "description": "Z"},
            headers=user.headers,
        )
        self.assert_error_response(response, 403)

    def test_required_fields(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/success-stories", json={"company_name": "Acme", "founder": "Jane"}, headers=admin.headers
        )
        assert response.status_code == 422

    def test_featured_listed_first(self):
        admin = self.create_admin()
        plain = self._create_story(admin, company_name="Plain")
        featured = self._create_story(admin, company_name="Star", featured=True)

        stories = self.assert_response(self.client.get("/v1/success-stories"), 200)
        assert [s["id"] for s in stories] == [featured["id"], plain["id"]]

        only_featured = self.assert_response(self.client.get("/v1/success-stories/featured"), 200)
        assert [s["id"] for s in only_featured] == [featured["id"]]

        recent = self.assert_response(self.client.get("/v1/success-stories/recent", params={"limit": 1}), 200)
        assert len(recent) == 1

    def test_update_and_delete_story(self):
        admin = self.create_admin()
        story = self._create_story(admin)

        data = self.assert_response(
            self.client.patch(f"/v1/success-stories/{story['id']}", json={"featured": True}, headers=admin.headers),
            200,
        )
        assert data["featured"] is True
        assert data["company_name"] == "Acme"

        self.assert_response(self.client.delete(f"/v1/success-stories/{story['id']}", headers=admin.headers), 204)
        self.assert_error_response(self.client.get(f"/v1/success-stories/{story['id']}"), 404)

    def test_update_rejects_null_required_fields(self):
        admin = self.create_admin()
        story = self._create_story(admin)
        for body in ({"company_name": None}, {"founder": None}, {"description": None}, {"featured": None}):
            response = self.client.patch(f"/v1/success-stories/{story['id']}", json=body, headers=admin.headers)
            assert response.status_code == 422

    def test_upload_story_image(self):
        admin = self.create_admin()
        story = self._create_story(admin)
        data = self.assert_response(
            self.client.post(
                f"/v1/success-stories/{story['id']}/image",
                files={"file": ("team.gif", b"GIF89a", "image/gif")},
                headers=admin.headers,
            ),
            200,
        )
        assert data["image_url"].startswith(
            f"http://testserver/storage/v1/object/public/success-stories/{story['id']}-"
        )


class TestResourceAPI(BaseAPITester):
    """자료실 테스트"""

    def _create_category(self, admin, name="Guides"):
        return self.assert_response(
            self.client.post("/v1/resources/categories", json={"name": name, "type": "document"}, headers=admin.headers),
            201,
        )

    def test_categories(self):
        admin = self.create_admin()
        user = self.create_user()
        self._create_category(admin, "Templates")
        self._create_category(admin, "Guides")

        categories = self.assert_response(self.client.get("/v1/resources/categories", headers=user.headers), 200)
        assert [c["name"] for c in categories] == ["Guides", "Templates"]

        response = self.client.post("/v1/resources/categories", json={"name": "Nope"}, headers=user.headers)
        self.assert_error_response(response, 403)

    def test_resource_view_count(self):
        """상세 조회마다 view_count 1 증가"""
        admin = self.create_admin()
        user = self.create_user()
        category = self._create_category(admin)
        resource = self.assert_response(
            self.client.post(
                "/v1/resources",
                json={"category_id": category["id"], "title": "Pitch deck template", "content": "..."},
                headers=admin.headers,
            ),
            201,
        )
        assert resource["view_count"] == 0
        assert resource["created_by"] == admin.id

        first = self.assert_response(self.client.get(f"/v1/resources/{resource['id']}", headers=user.headers), 200)
        second = self.assert_response(self.client.get(f"/v1/resources/{resource['id']}", headers=user.headers), 200)
        assert first["view_count"] == 1
        assert second["view_count"] == 2

    def test_resources_require_login(self):
        self.assert_error_response(self.client.get("/v1/resources"), 401)

    def test_filter_by_category(self):
        admin = self.create_admin()
        guides = self._create_category(admin, "Guides")
        templates = self._create_category(admin, "Templates")
        guide = self.assert_response(
            self.client.post("/v1/resources", json={"category_id": guides["id"], "title": "Guide"}, headers=admin.headers),
            201,
        )
        self.client.post("/v1/resources", json={"category_id": templates["id"], "title": "Tpl"}, headers=admin.headers)

        data = self.assert_response(
            self.client.get("/v1/resources", params={"category_id": guides["id"]}, headers=admin.headers), 200
        )
        assert [r["id"] for r in data] == [guide["id"]]
        assert len(self.assert_response(self.client.get("/v1/resources", headers=admin.headers), 200)) == 2

    def test_resource_unknown_category(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/resources", json={"category_id": str(uuid.uuid4()), "title": "Orphan"}, headers=admin.headers
        )
        self.assert_error_response(response, 404, expected_error_type="NotFoundError")

    def test_update_and_delete_resource(self):
        admin = self.create_admin()
        resource = self.assert_response(
            self.client.post("/v1/resources", json={"title": "Old"}, headers=admin.headers), 201
        )
        data = self.assert_response(
            self.client.patch(f"/v1/resources/{resource['id']}", json={"is_premium": True}, headers=admin.headers), 200
        )
        assert data["is_premium"] is True
        assert data["title"] == "Old"

        self.assert_response(self.client.delete(f"/v1/resources/{resource['id']}", headers=admin.headers), 204)
        self.assert_error_response(self.client.get(f"/v1/resources/{resource['id']}", headers=admin.headers), 404)


class TestRecordingAPI(BaseAPITester):
    """녹화본 테스트"""

    def _create_recording(self, admin, **overrides):
        payload = {"title": "Demo Day 2025", "recording_url": "https://video.test/demo", "duration": 3600}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/recordings", json=payload, headers=admin.headers), 201
        )

    def test_public_listing(self):
        admin = self.create_admin()
        public = self._create_recording(admin)
        self._create_recording(admin, title="Internal", is_public=False)

        data = self.assert_response(self.client.get("/v1/recordings"), 200)
        assert [r["id"] for r in data] == [public["id"]]

    def test_view_count(self):
        admin = self.create_admin()
        recording = self._create_recording(admin)

        for expected in (1, 2, 3):
            data = self.assert_response(self.client.post(f"/v1/recordings/{recording['id']}/view"), 200)
            assert data["view_count"] == expected

    def test_view_missing_recording(self):
        self.assert_error_response(self.client.post(f"/v1/recordings/{uuid.uuid4()}/view"), 404)

    def test_stats(self):
        admin = self.create_admin()
        popular = self._create_recording(admin, title="Popular")
        quiet = self._create_recording(admin, title="Quiet")
        for _ in range(3):
            self.client.post(f"/v1/recordings/{popular['id']}/view")
        self.client.post(f"/v1/recordings/{quiet['id']}/view")

        stats = self.assert_response(self.client.get("/v1/recordings/stats", headers=admin.headers), 200)
        assert stats["total_recordings"] == 2
        assert stats["total_views"] == 4
        assert stats["most_viewed"]["id"] == popular["id"]

    def test_stats_empty(self):
        admin = self.create_admin()
        stats = self.assert_response(self.client.get("/v1/recordings/stats", headers=admin.headers), 200)
        assert stats == {"total_recordings": 0, "total_views": 0, "most_viewed": None}

    def test_update_rejects_null_required_fields(self):
        admin = self.create_admin()
        recording = self._create_recording(admin)
        for body in ({"title": None}, {"recording_url": None}, {"is_public": None}):
            response = self.client.patch(f"/v1/recordings/{recording['id']}", json=body, headers=admin.headers)
            assert response.status_code == 422

        resource = self.assert_response(self.client.post("/v1/resources", json={"title": "Doc"}, headers=admin.headers), 201)
        response = self.client.patch(f"/v1/resources/{resource['id']}", json={"title": None}, headers=admin.headers)
        assert response.status_code == 422

    def test_update_delete_and_thumbnail(self):
        admin = self.create_admin()
        recording = self._create_recording(admin)

        data = self.assert_response(
            self.client.patch(
                f"/v1/recordings/{recording['id']}", json={"presenter_name": "Jane"}, headers=admin.headers
            ),
            200,
        )
        assert data["presenter_name"] == "Jane"

        data = self.assert_response(
            self.client.post(
                f"/v1/recordings/{recording['id']}/thumbnail",
                files={"file": ("thumb.jpg", b"jpg", "image/jpeg")},
                headers=admin.headers,
            ),
            200,
        )
        assert "/storage/v1/object/public/recordings/" in data["thumbnail_url"]

        self.assert_response(self.client.delete(f"/v1/recordings/{recording['id']}", headers=admin.headers), 204)
        self.assert_error_response(self.client.get(f"/v1/recordings/{recording['id']}"), 404)
