# taskboard/main.py
import logging

from dotenv import load_dotenv

# .env 는 설정 객체보다 먼저 한 번에 로딩
load_dotenv()

from fastapi import FastAPI, HTTPException, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from sqlmodel import text  # noqa: E402

from taskboard.core.config import get_settings  # noqa: E402
from taskboard.core.errors import TaskboardError  # noqa: E402
from taskboard.core.logging_config import setup_logging  # noqa: E402
from taskboard.db.session import get_engine  # noqa: E402

# 모델 모듈 임포트(테이블 등록 보장용)
from taskboard.models import category as _m_category  # noqa: F401,E402
from taskboard.models import task as _m_task  # noqa: F401,E402
from taskboard.models import user as _m_user  # noqa: F401,E402

# 라우터
from taskboard.routers import auth, category, task, user  # noqa: E402

settings = get_settings()

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Taskboard API",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# 라우터 등록
app.include_router(auth.auth_router)
app.include_router(user.user_router)
app.include_router(category.router)
app.include_router(task.router)


@app.get("/health")
def health_app():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    # Migration is a deployment concern. Runtime only verifies DB connectivity.
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        logger.exception("database health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")
