import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventplanner.config import get_settings
from eventplanner.controllers.attendance import router as attendance_router
from eventplanner.controllers.events import router as events_router
from eventplanner.controllers.health import router as health_router
from eventplanner.errors import register_exception_handlers
from eventplanner.lifespan import lifespan
from eventplanner.middleware import HTTPLogMiddleware

settings = get_settings()

app = FastAPI(title="Event Planner API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_origin_regex=settings.cors.origins_regex or None,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.debug.request:
    logging.getLogger("eventplanner.http").setLevel(logging.DEBUG)
    app.add_middleware(HTTPLogMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(events_router, prefix="/api")
app.include_router(attendance_router, prefix="/api")
