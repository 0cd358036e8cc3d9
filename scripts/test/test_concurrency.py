"""
동시 생성 충돌 처리 테스트

테스트 시나리오:
1. 존재 확인 직후 다른 요청이 같은 (event, user) 등록을 먼저 커밋
   -> 유니크 제약 위반, 먼저 생성된 등록을 created=False로 반환, 카운트 변화 없음
2. 존재 확인 직후 다른 요청이 같은 사용자 쌍의 1:1 방을 먼저 커밋
   -> direct_key 유니크 제약 위반, 먼저 생성된 방 반환

존재 확인 조회를 첫 호출만 None을 돌려주도록 바꿔서
"확인 -> (다른 요청 커밋) -> insert" 순서를 재현
"""

import uuid

from sqlalchemy import func, select

from app.dependencies.aggregate_repositories import EventAggregateRepositories
from app.models.chat import ChatRoom
from app.repositories.auth import UserRepository
from app.repositories.chat_repository import ChatRepository
from app.schemas.auth import CurrentUser
from app.services.chat_service import ChatService, direct_room_key
from app.services.event.registration_service import RegistrationService
from scripts.test.base import BaseAPITester


def _stale_on_first_call(real_lookup):
    """첫 호출은 아직 커밋 전인 것처럼 None, 이후는 실제 조회"""
    calls = []

    def lookup(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return None
        return real_lookup(*args, **kwargs)

    lookup.calls = calls
    return lookup


class TestConcurrentRegistration(BaseAPITester):
    """등록 유니크 키 충돌"""

    def test_lost_insert_returns_winning_registration(self, monkeypatch):
        admin = self.create_admin()
        user = self.create_user()
        event = self.create_event(admin)

        # 먼저 커밋된 등록
        winner = self.assert_response(
            self.client.post(f"/v1/events/{event['id']}/register", headers=user.headers), 201
        )
        assert winner["attendees_count"] == 1

        service = RegistrationService(db=self.db, repos=EventAggregateRepositories(self.db))
        lookup = _stale_on_first_call(service.repos.registration.get_by_event_and_user)
        monkeypatch.setattr(service.repos.registration, "get_by_event_and_user", lookup)

        current_user = CurrentUser(id=uuid.UUID(user.id), email=user.email, is_admin=False)
        result = service.register_for_event(uuid.UUID(event["id"]), current_user)

        assert len(lookup.calls) == 2
        assert str(result.registration_id) == winner["registration_id"]
        assert result.created is False
        assert result.attendees_count == 1

        data = self.assert_response(self.client.get(f"/v1/events/{event['id']}"), 200)
        assert data["attendees_count"] == 1
        registrations = self.assert_response(
            self.client.get(f"/v1/admin/events/{event['id']}/registrations", headers=admin.headers), 200
        )
        assert [r["id"] for r in registrations] == [winner["registration_id"]]


class TestConcurrentDirectRoom(BaseAPITester):
    """1:1 채팅방 direct_key 충돌"""

    def test_lost_insert_returns_winning_room(self, monkeypatch):
        alice = self.create_user()
        bob = self.create_user()

        # 먼저 커밋된 방
        winner = self.assert_response(
            self.client.post("/v1/chat/direct", json={"other_user_id": bob.id}, headers=alice.headers), 200
        )

        service = ChatService(db=self.db, chat_repo=ChatRepository(self.db), user_repo=UserRepository(self.db))
        lookup = _stale_on_first_call(service.chat_repo.get_room_by_direct_key)
        monkeypatch.setattr(service.chat_repo, "get_room_by_direct_key", lookup)
        monkeypatch.setattr(service.chat_repo, "get_private_room_by_names", lambda names: None)

        room = service.get_or_create_direct_message_room(uuid.UUID(bob.id), uuid.UUID(alice.id))

        assert len(lookup.calls) == 2
        assert str(room.id) == winner["id"]

        key = direct_room_key(uuid.UUID(alice.id), uuid.UUID(bob.id))
        count = self.db.execute(
            select(func.count()).select_from(ChatRoom).where(ChatRoom.direct_key == key)
        ).scalar_one()
        assert count == 1
