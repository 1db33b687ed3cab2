from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .database import create_tables
from .logging_setup import setup_logging
from .routers import auth, pages, tasks

# Create FastAPI app
app = FastAPI(
    title="Tasklist",
    description="Personal to-do list application",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(tasks.router, prefix="/api", tags=["tasks"])
app.include_router(pages.router, tags=["pages"], include_in_schema=False)


# Create tables on startup
@app.on_event("startup")
def on_startup():
    setup_logging(LOG_LEVEL)
    create_tables()


@app.get("/health")
def health_check():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
