import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from os import getenv

from app.routers.auth import router as auth_router
from app.routers.event import router as event_router
from app.routers.chat import router as chat_router
from app.routers.membership import router as membership_router
from app.routers.networking import router as networking_router
from app.routers.content import router as content_router
from app.routers.mentorship import router as mentorship_router
from app.routers.admin import router as admin_router
from app.routers.cms import router as cms_router
from app.routers.storage import router as storage_router, public_router as storage_public_router
from app.dependencies.error_handlers import register_error_handlers

logging.basicConfig(level=getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(title="Startup Club API")

# 전역 예외 핸들러 등록
register_error_handlers(app)

# CORS 설정
cors_origins = getenv("CORS_ORIGINS", "*")
if cors_origins == "*":
    origins = ["*"]
    allow_credentials = False
else:
    origins = [origin.strip() for origin in cors_origins.split(",")]
    # 개발 환경: localhost:5173 자동 추가 (중복 방지)
    dev_origin = "http://localhost:5173"
    if dev_origin not in origins:
        origins.append(dev_origin)
    allow_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Startup Club API"}

@app.get("/health")
async def health():
    return {"status": "ok"}

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(event_router, prefix="/v1")
app.include_router(chat_router, prefix="/v1")
app.include_router(membership_router, prefix="/v1")
app.include_router(networking_router, prefix="/v1")
app.include_router(content_router, prefix="/v1")
app.include_router(mentorship_router, prefix="/v1")
app.include_router(admin_router, prefix="/v1")
app.include_router(cms_router, prefix="/v1")
app.include_router(storage_router, prefix="/v1")
app.include_router(storage_public_router)
