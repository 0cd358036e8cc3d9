from fastapi import APIRouter

from app.routers.event import events, registration, admin


router = APIRouter()

# 모든 서브 라우터를 메인 라우터에 포함
router.include_router(events.router)
router.include_router(registration.router)
router.include_router(admin.router)
