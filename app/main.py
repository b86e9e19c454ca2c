import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import users as user_endpoints
from app.api.endpoints import events as event_endpoints
from app.api.endpoints import matches as match_endpoints
from app.api.endpoints import match_requests as match_request_endpoints
from app.api.endpoints import videos as video_endpoints
from app.core.database import init_db
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="BJJ Events API")

# Include routers
app.include_router(auth_endpoints.router, prefix="/auth", tags=["Authentication"])
app.include_router(user_endpoints.router, prefix="/users", tags=["Users"])
app.include_router(event_endpoints.router, prefix="/events", tags=["Events"])
app.include_router(match_endpoints.router, prefix="/matches", tags=["Matches"])
app.include_router(match_request_endpoints.router, prefix="/requests", tags=["Match Requests"])
app.include_router(video_endpoints.router, prefix="/videos", tags=["Videos"])


@app.on_event("startup")
async def startup_event():
    init_db()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/")
async def root():
    return {"message": "BJJ Events API"}
