from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
import logging

from . import routers
from .config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from .database import init_db, check_db_connection

logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="EventHub API",
    description="Event management API: events, tickets, registrations and community features",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error with the common error envelope"""
    if isinstance(exc.detail, dict):
        content = {"success": False, **exc.detail}
    else:
        content = {"success": False, "error": str(exc.detail), "message": str(exc.detail)}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Validation failed",
            "message": message,
            "details": jsonable_encoder(errors, exclude={"ctx", "url", "input"}),
        },
    )


@app.on_event("startup")
async def startup_event():
    logger.info("Starting EventHub API")
    init_db()


# Include routers
app.include_router(routers.auth.router, prefix=f"{API_PREFIX}/auth")
app.include_router(routers.users.router, prefix=f"{API_PREFIX}/users")
app.include_router(routers.events.router, prefix=f"{API_PREFIX}/events")
app.include_router(routers.tickets.router, prefix=f"{API_PREFIX}/tickets")
app.include_router(routers.attendees.router, prefix=f"{API_PREFIX}/attendees")
app.include_router(routers.forums.router, prefix=f"{API_PREFIX}/forums")
app.include_router(routers.polls.router, prefix=f"{API_PREFIX}/polls")
app.include_router(routers.qa.router, prefix=f"{API_PREFIX}/qa")
app.include_router(
    routers.notifications.router, prefix=f"{API_PREFIX}/notifications"
)
app.include_router(routers.payments.router, prefix=f"{API_PREFIX}/payments")


@app.get("/")
async def root():
    return {"message": "Welcome to EventHub API", "status": "running"}


@app.get(f"{API_PREFIX}/health")
async def health_check():
    db_status = check_db_connection()
    healthy = db_status["database"]

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "eventhub-api",
            "version": "1.0.0",
            **db_status,
        },
    )


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
