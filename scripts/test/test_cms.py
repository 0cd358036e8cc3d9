"""
관리자 CMS API 테스트

테스트 항목:
- /v1/slides, /v1/admin/slides - 홈 슬라이드 (순서 변경, 활성 토글, 이미지 파일 정리)
- /v1/sponsors, /v1/admin/sponsors - 스폰서 (로고 업로드, 제휴 기간 검증)
- /v1/important-members, /v1/admin/important-members - 운영진 카드 (아바타 교체)
- /v1/forum-categories, /v1/admin/forum-categories - 포럼 카테고리
- /v1/system-config, /v1/admin/system-config - 사이트 설정
"""

import uuid

from scripts.test.base import BaseAPITester


class TestSlideAPI(BaseAPITester):
    """홈 슬라이드 테스트"""

    def _create_slide(self, admin, **overrides):
        payload = {"title": "Welcome", "image_url": "https://cdn.test/welcome.png"}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/admin/slides", json=payload, headers=admin.headers), 201
        )

    def test_new_slides_append_to_end(self):
        admin = self.create_admin()
        first = self._create_slide(admin, title="First")
        second = self._create_slide(admin, title="Second")
        assert first["display_order"] == 1
        assert second["display_order"] == 2
        assert first["is_active"] is True

        data = self.assert_response(self.client.get("/v1/slides"), 200)
        assert [s["id"] for s in data] == [first["id"], second["id"]]

    def test_public_list_hides_inactive(self):
        admin = self.create_admin()
        visible = self._create_slide(admin, title="Visible")
        hidden = self._create_slide(admin, title="Hidden", is_active=False)

        public = self.assert_response(self.client.get("/v1/slides"), 200)
        assert [s["id"] for s in public] == [visible["id"]]

        everything = self.assert_response(self.client.get("/v1/admin/slides", headers=admin.headers), 200)
        assert {s["id"] for s in everything} == {visible["id"], hidden["id"]}

        toggled = self.assert_response(
            self.client.post(f"/v1/admin/slides/{hidden['id']}/toggle", headers=admin.headers), 200
        )
        assert toggled["is_active"] is True
        assert len(self.assert_response(self.client.get("/v1/slides"), 200)) == 2

    def test_reorder_slides(self):
        """요청 순서대로 display_order 1..n"""
        admin = self.create_admin()
        a = self._create_slide(admin, title="A")
        b = self._create_slide(admin, title="B")
        c = self._create_slide(admin, title="C")

        data = self.assert_response(
            self.client.post(
                "/v1/admin/slides/reorder", json={"ids": [c["id"], a["id"], b["id"]]}, headers=admin.headers
            ),
            200,
        )
        assert [s["id"] for s in data] == [c["id"], a["id"], b["id"]]
        assert [s["display_order"] for s in data] == [1, 2, 3]

        public = self.assert_response(self.client.get("/v1/slides"), 200)
        assert [s["title"] for s in public] == ["C", "A", "B"]

    def test_reorder_rejects_unknown_and_duplicate_ids(self):
        admin = self.create_admin()
        a = self._create_slide(admin, title="A")
        b = self._create_slide(admin, title="B")
        missing = str(uuid.uuid4())

        response = self.client.post(
            "/v1/admin/slides/reorder", json={"ids": [b["id"], missing]}, headers=admin.headers
        )
        self.assert_error_response(response, 404, expected_error_type="NotFoundError")
        assert missing in response.json()["detail"]

        response = self.client.post(
            "/v1/admin/slides/reorder", json={"ids": [a["id"], a["id"]]}, headers=admin.headers
        )
        self.assert_error_response(response, 400, expected_error_type="ValidationError")

        # 실패한 요청은 순서를 바꾸지 않음
        public = self.assert_response(self.client.get("/v1/slides"), 200)
        assert [s["id"] for s in public] == [a["id"], b["id"]]

        response = self.client.post("/v1/admin/slides/reorder", json={"ids": []}, headers=admin.headers)
        assert response.status_code == 422

    def test_upload_create_and_delete_removes_file(self):
        admin = self.create_admin()
        upload = self.assert_response(
            self.client.post(
                "/v1/admin/slides/image",
                files={"file": ("hero.png", b"png-bytes", "image/png")},
                headers=admin.headers,
            ),
            201,
            required_fields=["bucket", "path", "public_url"],
        )
        assert upload["bucket"] == "slides"
        stored = self.storage_root / "slides" / upload["path"]
        assert stored.is_file()

        slide = self._create_slide(admin, image_url=upload["public_url"])
        self.assert_response(self.client.delete(f"/v1/admin/slides/{slide['id']}", headers=admin.headers), 204)
        assert not stored.exists()
        self.assert_error_response(
            self.client.patch(f"/v1/admin/slides/{slide['id']}", json={"title": "x"}, headers=admin.headers), 404
        )

    def test_replacing_image_removes_old_file(self):
        admin = self.create_admin()
        old = self.assert_response(
            self.client.post(
                "/v1/admin/slides/image",
                files={"file": ("old.png", b"old", "image/png")},
                headers=admin.headers,
            ),
            201,
        )
        slide = self._create_slide(admin, image_url=old["public_url"])

        data = self.assert_response(
            self.client.patch(
                f"/v1/admin/slides/{slide['id']}",
                json={"image_url": "https://cdn.test/new.png"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["image_url"] == "https://cdn.test/new.png"
        assert not (self.storage_root / "slides" / old["path"]).exists()

    def test_update_rejects_null_required_fields(self):
        admin = self.create_admin()
        slide = self._create_slide(admin)
        for body in ({"title": None}, {"image_url": None}, {"display_order": None}, {"is_active": None}):
            response = self.client.patch(f"/v1/admin/slides/{slide['id']}", json=body, headers=admin.headers)
            assert response.status_code == 422

        data = self.assert_response(
            self.client.patch(f"/v1/admin/slides/{slide['id']}", json={"description": None}, headers=admin.headers),
            200,
        )
        assert data["title"] == "Welcome"

    def test_slides_admin_only(self):
        user = self.create_user()
        response = self.client.post(
            "/v1/admin/slides", json={"title": "x", "image_url": "https://cdn.test/x.png"}, headers=user.headers
        )
        self.assert_error_response(response, 403)
        self.assert_error_response(self.client.get("/v1/admin/slides", headers=user.headers), 403)


class TestSponsorAPI(BaseAPITester):
    """스폰서 테스트"""

    def _create_sponsor(self, admin, **overrides):
        payload = {"company_name": "Globex", "website_url": "https://globex.test"}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/admin/sponsors", json=payload, headers=admin.headers), 201
        )

    def test_public_list_active_in_order(self):
        admin = self.create_admin()
        gold = self._create_sponsor(admin, company_name="Gold", display_order=1)
        silver = self._create_sponsor(admin, company_name="Silver", display_order=2)
        self._create_sponsor(admin, company_name="Former", is_active=False)

        data = self.assert_response(self.client.get("/v1/sponsors"), 200)
        assert [s["id"] for s in data] == [gold["id"], silver["id"]]

        everything = self.assert_response(self.client.get("/v1/admin/sponsors", headers=admin.headers), 200)
        assert len(everything) == 3

    def test_toggle_and_reorder(self):
        admin = self.create_admin()
        a = self._create_sponsor(admin, company_name="A")
        b = self._create_sponsor(admin, company_name="B")

        toggled = self.assert_response(
            self.client.post(f"/v1/admin/sponsors/{a['id']}/toggle", headers=admin.headers), 200
        )
        assert toggled["is_active"] is False
        assert [s["id"] for s in self.assert_response(self.client.get("/v1/sponsors"), 200)] == [b["id"]]

        data = self.assert_response(
            self.client.post("/v1/admin/sponsors/reorder", json={"ids": [b["id"], a["id"]]}, headers=admin.headers),
            200,
        )
        assert [(s["company_name"], s["display_order"]) for s in data] == [("B", 1), ("A", 2)]

    def test_partnership_period(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/admin/sponsors",
            json={"company_name": "Backwards", "partnership_start_date": "2025-06-01",
                  "partnership_end_date": "2025-01-01"},
            headers=admin.headers,
        )
        assert response.status_code == 422

        sponsor = self._create_sponsor(admin, partnership_start_date="2025-06-01")
        response = self.client.patch(
            f"/v1/admin/sponsors/{sponsor['id']}",
            json={"partnership_end_date": "2025-01-01"},
            headers=admin.headers,
        )
        self.assert_error_response(response, 400, expected_error_type="ValidationError")

        data = self.assert_response(
            self.client.patch(
                f"/v1/admin/sponsors/{sponsor['id']}",
                json={"partnership_end_date": "2026-06-01"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["partnership_end_date"] == "2026-06-01"

    def test_logo_upload_and_delete_removes_file(self):
        admin = self.create_admin()
        sponsor = self._create_sponsor(admin)

        first = self.assert_response(
            self.client.post(
                f"/v1/admin/sponsors/{sponsor['id']}/logo",
                files={"file": ("logo.png", b"v1", "image/png")},
                headers=admin.headers,
            ),
            200,
        )
        prefix = "http://testserver/storage/v1/object/public/sponsors/"
        assert first["logo_url"].startswith(f"{prefix}{sponsor['id']}-")
        first_file = self.storage_root / "sponsors" / first["logo_url"][len(prefix):]
        assert first_file.is_file()

        self.assert_response(self.client.delete(f"/v1/admin/sponsors/{sponsor['id']}", headers=admin.headers), 204)
        assert not first_file.exists()
        assert self.assert_response(self.client.get("/v1/sponsors"), 200) == []

    def test_update_rejects_null_company_name(self):
        admin = self.create_admin()
        sponsor = self._create_sponsor(admin)
        response = self.client.patch(
            f"/v1/admin/sponsors/{sponsor['id']}", json={"company_name": None}, headers=admin.headers
        )
        assert response.status_code == 422


class TestImportantMemberAPI(BaseAPITester):
    """운영진 카드 테스트"""

    def _create_member(self, admin, **overrides):
        payload = {"name": "Priya Rao", "role": "President", "expertise": ["Fintech", "Growth"]}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/admin/important-members", json=payload, headers=admin.headers), 201
        )

    def test_create_and_list(self):
        admin = self.create_admin()
        president = self._create_member(admin)
        self._create_member(admin, name="Alum", role="Advisor", is_active=False)

        data = self.assert_response(self.client.get("/v1/important-members"), 200)
        assert [m["id"] for m in data] == [president["id"]]
        assert data[0]["expertise"] == ["Fintech", "Growth"]

    def test_required_fields(self):
        admin = self.create_admin()
        response = self.client.post(
            "/v1/admin/important-members", json={"name": "No Role"}, headers=admin.headers
        )
        assert response.status_code == 422

    def test_avatar_replacement_removes_old_file(self):
        admin = self.create_admin()
        member = self._create_member(admin)
        prefix = "http://testserver/storage/v1/object/public/members/"

        first = self.assert_response(
            self.client.post(
                f"/v1/admin/important-members/{member['id']}/avatar",
                files={"file": ("a.jpg", b"first", "image/jpeg")},
                headers=admin.headers,
            ),
            200,
        )
        first_file = self.storage_root / "members" / first["avatar_url"][len(prefix):]
        assert first_file.is_file()

        second = self.assert_response(
            self.client.patch(
                f"/v1/admin/important-members/{member['id']}",
                json={"avatar_url": "https://cdn.test/b.jpg"},
                headers=admin.headers,
            ),
            200,
        )
        assert second["avatar_url"] == "https://cdn.test/b.jpg"
        assert not first_file.exists()

    def test_reorder_and_delete(self):
        admin = self.create_admin()
        a = self._create_member(admin, name="A")
        b = self._create_member(admin, name="B")

        data = self.assert_response(
            self.client.post(
                "/v1/admin/important-members/reorder", json={"ids": [b["id"], a["id"]]}, headers=admin.headers
            ),
            200,
        )
        assert [m["name"] for m in data] == ["B", "A"]

        self.assert_response(
            self.client.delete(f"/v1/admin/important-members/{a['id']}", headers=admin.headers), 204
        )
        assert [m["id"] for m in self.assert_response(self.client.get("/v1/important-members"), 200)] == [b["id"]]

    def test_update_rejects_null_role(self):
        admin = self.create_admin()
        member = self._create_member(admin)
        response = self.client.patch(
            f"/v1/admin/important-members/{member['id']}", json={"role": None}, headers=admin.headers
        )
        assert response.status_code == 422


class TestForumCategoryAPI(BaseAPITester):
    """포럼 카테고리 테스트"""

    def _create_category(self, admin, name, **overrides):
        payload = {"name": name}
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/admin/forum-categories", json=payload, headers=admin.headers), 201
        )

    def test_list_by_order_then_name(self):
        admin = self.create_admin()
        self._create_category(admin, "Hiring", order_num=2)
        self._create_category(admin, "Funding", order_num=1)
        self._create_category(admin, "Events", order_num=2)

        data = self.assert_response(self.client.get("/v1/forum-categories"), 200)
        assert [c["name"] for c in data] == ["Funding", "Events", "Hiring"]

    def test_duplicate_name_conflict(self):
        admin = self.create_admin()
        self._create_category(admin, "General")
        other = self._create_category(admin, "Random")

        response = self.client.post("/v1/admin/forum-categories", json={"name": "General"}, headers=admin.headers)
        self.assert_error_response(response, 409, expected_error_type="ConflictError")

        response = self.client.patch(
            f"/v1/admin/forum-categories/{other['id']}", json={"name": "General"}, headers=admin.headers
        )
        self.assert_error_response(response, 409)

    def test_update_and_delete(self):
        admin = self.create_admin()
        category = self._create_category(admin, "Ideas")

        data = self.assert_response(
            self.client.patch(
                f"/v1/admin/forum-categories/{category['id']}",
                json={"description": "Share early ideas"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["description"] == "Share early ideas"
        assert data["name"] == "Ideas"

        response = self.client.patch(
            f"/v1/admin/forum-categories/{category['id']}", json={"name": None}, headers=admin.headers
        )
        assert response.status_code == 422

        self.assert_response(
            self.client.delete(f"/v1/admin/forum-categories/{category['id']}", headers=admin.headers), 204
        )
        assert self.assert_response(self.client.get("/v1/forum-categories"), 200) == []
        self.assert_error_response(
            self.client.delete(f"/v1/admin/forum-categories/{category['id']}", headers=admin.headers), 404
        )

    def test_admin_only(self):
        user = self.create_user()
        response = self.client.post("/v1/admin/forum-categories", json={"name": "Nope"}, headers=user.headers)
        self.assert_error_response(response, 403)


class TestSystemConfigAPI(BaseAPITester):
    """사이트 설정 테스트"""

    def test_defaults_created_on_first_read(self):
        data = self.assert_response(self.client.get("/v1/system-config"), 200)
        assert data["maintenance_mode"] is False
        assert data["registration_open"] is True
        assert data["allow_guest_access"] is True
        assert data["footer_text"] == "SR University Startup Club"
        assert data["primary_color"] == "#4f46e5"
        assert data["contact_email"] is None

        again = self.assert_response(self.client.get("/v1/system-config"), 200)
        assert again["footer_text"] == data["footer_text"]

    def test_partial_update(self):
        admin = self.create_admin()
        data = self.assert_response(
            self.client.patch(
                "/v1/admin/system-config",
                json={"maintenance_mode": True, "contact_email": "team@club.test"},
                headers=admin.headers,
            ),
            200,
        )
        assert data["maintenance_mode"] is True
        assert data["contact_email"] == "team@club.test"
        assert data["primary_color"] == "#4f46e5"

        public = self.assert_response(self.client.get("/v1/system-config"), 200)
        assert public["maintenance_mode"] is True

    def test_rejects_invalid_values(self):
        admin = self.create_admin()
        for body in ({"primary_color": "indigo"}, {"footer_text": None}, {"registration_open": None},
                     {"contact_email": "not-an-email"}):
            response = self.client.patch("/v1/admin/system-config", json=body, headers=admin.headers)
            assert response.status_code == 422

    def test_update_admin_only(self):
        user = self.create_user()
        response = self.client.patch(
            "/v1/admin/system-config", json={"maintenance_mode": True}, headers=user.headers
        )
        self.assert_error_response(response, 403)
        assert self.assert_response(self.client.get("/v1/system-config"), 200)["maintenance_mode"] is False
