import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from fittrack.config import settings
from fittrack.database import init_database
from fittrack.routers import (
    activity_log,
    auth,
    calorie_log,
    health,
    logs,
    nutrition_search,
    users,
    weight_log,
)
from fittrack.services.route_gate import route_gate
from fittrack.utils.response import create_response, handle_exception, validation_message

logging.basicConfig(level=settings.LOG_LEVEL)
settings.validate()

app = FastAPI(title=settings.PROJECT_NAME)

# Page-level redirects based on cookie presence only
app.middleware("http")(route_gate)

# CORS for SPA / API access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event():
    init_database()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return handle_exception(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return create_response(
        validation_message(exc.errors()),
        None,
        status.HTTP_400_BAD_REQUEST,
        status_text="error",
    )


# Add routes
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(calorie_log.router)
app.include_router(weight_log.router)
app.include_router(activity_log.router)
app.include_router(logs.router)
app.include_router(health.router)
app.include_router(nutrition_search.router)


@app.get("/api")
def home():
    try:
        return create_response(
            message="FitTrack API running",
            data={"service": "fittrack-backend"},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


# Serve the built frontend last so API routes win
if settings.FRONTEND_DIR and Path(settings.FRONTEND_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.FRONTEND_DIR, html=True), name="frontend")
