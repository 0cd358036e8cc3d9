"""
스토리지 API 테스트

테스트 항목:
- GET/POST /v1/storage/buckets - 버킷 목록/생성 (관리자)
- POST /v1/storage/{bucket}/upload - 업로드 (MIME/크기 검증)
- GET /storage/v1/object/public/{bucket}/{path} - 공개 객체 조회
"""

from scripts.test.base import BaseAPITester


class TestStorageAPI(BaseAPITester):
    """버킷/객체 테스트"""

    def _create_bucket(self, admin, **overrides):
        payload = {
            "name": "docs",
            "public": True,
            "allowed_mime_types": ["application/pdf"],
            "file_size_limit": 10,
        }
        payload.update(overrides)
        return self.assert_response(
            self.client.post("/v1/storage/buckets", json=payload, headers=admin.headers), 201
        )

    def _upload(self, admin, bucket, path, content, content_type):
        return self.client.post(
            f"/v1/storage/{bucket}/upload",
            data={"path": path},
            files={"file": (path.rsplit("/", 1)[-1], content, content_type)},
            headers=admin.headers,
        )

    def test_create_and_list_buckets(self):
        admin = self.create_admin()
        created = self._create_bucket(admin)
        assert created["name"] == "docs"
        assert created["allowed_mime_types"] == ["application/pdf"]

        buckets = self.assert_response(self.client.get("/v1/storage/buckets", headers=admin.headers), 200)
        assert [b["name"] for b in buckets] == ["docs"]

    def test_create_duplicate_bucket(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        response = self.client.post("/v1/storage/buckets", json={"name": "docs"}, headers=admin.headers)
        self.assert_error_response(response, 409, expected_message_contains="already exists")

    def test_bucket_name_pattern(self):
        admin = self.create_admin()
        response = self.client.post("/v1/storage/buckets", json={"name": "Bad Name"}, headers=admin.headers)
        assert response.status_code == 422

    def test_bucket_admin_only(self):
        user = self.create_user()
        self.assert_error_response(self.client.get("/v1/storage/buckets", headers=user.headers), 403)

    def test_upload_and_serve(self):
        admin = self.create_admin()
        self._create_bucket(admin)

        data = self.assert_response(
            self._upload(admin, "docs", "reports/q1.pdf", b"%PDF1", "application/pdf"),
            201,
            required_fields=["bucket", "path", "public_url"],
        )
        assert data["path"] == "reports/q1.pdf"
        assert data["public_url"] == "http://testserver/storage/v1/object/public/docs/reports/q1.pdf"
        assert (self.storage_root / "docs" / "reports" / "q1.pdf").read_bytes() == b"%PDF1"

        served = self.client.get("/storage/v1/object/public/docs/reports/q1.pdf")
        assert served.status_code == 200
        assert served.content == b"%PDF1"

    def test_upload_overwrites_same_path(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        self.assert_response(self._upload(admin, "docs", "a.pdf", b"one", "application/pdf"), 201)
        self.assert_response(self._upload(admin, "docs", "a.pdf", b"two", "application/pdf"), 201)
        assert self.client.get("/storage/v1/object/public/docs/a.pdf").content == b"two"

    def test_upload_rejects_mime_type(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        response = self._upload(admin, "docs", "photo.png", b"png", "image/png")
        self.assert_error_response(response, 400, expected_message_contains="unsupported file type")

    def test_upload_rejects_large_file(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        response = self._upload(admin, "docs", "big.pdf", b"x" * 11, "application/pdf")
        self.assert_error_response(response, 400, expected_message_contains="file too large")

    def test_upload_rejects_parent_path(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        response = self._upload(admin, "docs", "../escape.pdf", b"x", "application/pdf")
        self.assert_error_response(response, 400, expected_message_contains="invalid object path")

    def test_upload_unknown_bucket(self):
        admin = self.create_admin()
        response = self._upload(admin, "nope", "a.pdf", b"x", "application/pdf")
        self.assert_error_response(response, 404, expected_error_type="BucketNotFoundError")

    def test_missing_object(self):
        admin = self.create_admin()
        self._create_bucket(admin)
        response = self.client.get("/storage/v1/object/public/docs/missing.pdf")
        self.assert_error_response(response, 404, expected_message_contains="object not found")

    def test_private_bucket_not_served(self):
        admin = self.create_admin()
        self._create_bucket(admin, name="private-docs", public=False)
        self.assert_response(self._upload(admin, "private-docs", "a.pdf", b"x", "application/pdf"), 201)
        response = self.client.get("/storage/v1/object/public/private-docs/a.pdf")
        self.assert_error_response(response, 404)
