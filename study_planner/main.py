import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from study_planner.api.base import api_router  # noqa: E402
from study_planner.api.deps import reset_study_timer  # noqa: E402
from study_planner.infra.supabase.errors import StoreError  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cancel the tick and break reminder of a timer left running
    reset_study_timer()


app = FastAPI(
    title="Study Planner API",
    description="Backend API for Study Planner - subjects, lessons and timed study sessions",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Specify your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Study Planner API",
        "docs": "/docs",
        "version": "1.0.0"
    }
