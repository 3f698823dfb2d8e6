from logging_config import setup_logging

# Initialize logging BEFORE anything else
setup_logging()

from contextlib import asynccontextmanager
from logging_config import get_logger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from middleware import RequestLifecycleMiddleware, register_exception_handlers
from routes import (
    auth, users, services, projects, blogs, team_members,
    testimonials, contacts, media, analytics,
)
from database import database, ensure_indexes
from seed import seed_collections
from config import config

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.connect()
    await ensure_indexes(database.db)
    if config.SEED_ON_STARTUP:
        await seed_collections(database.db)
    yield
    database.close()


app = FastAPI(title="AminWebTech API", lifespan=lifespan)

# CORS remains here as it's a global setting
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL] if config.ENV == "production" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request lifecycle middleware (request ID, context vars, duration logging)
app.add_middleware(RequestLifecycleMiddleware)

register_exception_handlers(app)

# REGISTER ROUTERS
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(services.router)
app.include_router(projects.router)
app.include_router(blogs.router)
app.include_router(team_members.router)
app.include_router(testimonials.router)
app.include_router(testimonials.public_router)
app.include_router(contacts.router)
app.include_router(media.router)
app.include_router(analytics.router)

logger.info("All routers registered, AminWebTech API ready")


@app.get("/")
async def root():
    return {"status": "online", "message": "AminWebTech API is running"}
