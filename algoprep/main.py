# algoprep/main.py

# ------------------------
# settings (.env is loaded by algoprep.config)
# ------------------------
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from algoprep.config import settings
from algoprep.db.base import init_db
from algoprep.errors import register_exception_handlers

# ------------------------
# routers
# ------------------------
from algoprep.routers import assistant as assistant_router
from algoprep.routers import interviews as interviews_router
from algoprep.routers import problems as problems_router
from algoprep.routers import resume as resume_router
from algoprep.routers import review as review_router
from algoprep.routers import taxonomy as taxonomy_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Supabase is migrated separately; local SQLite gets its tables here
    if settings.database_url.startswith("sqlite"):
        init_db()
    yield


# ------------------------
# 1) app
# ------------------------
app = FastAPI(title="AlgoPrep API", lifespan=lifespan)

# ------------------------
# 2) CORS
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,  # bearer tokens, no cookies
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ------------------------
# 3) routers
# ------------------------
app.include_router(interviews_router.router)
app.include_router(problems_router.router)
app.include_router(taxonomy_router.router)
app.include_router(review_router.router)
app.include_router(assistant_router.router)
app.include_router(resume_router.router)


# ------------------------
# 4) health check
# ------------------------
@app.get("/")
def root():
    return {"ok": True}
