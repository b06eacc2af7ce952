from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from timetrack.api.routes import health
from timetrack.core.config import settings
from timetrack.core.logging import configure_logging, get_logger
from timetrack.core.monitoring import configure_error_monitoring
from timetrack.core.observability import configure_observability
from timetrack.db.session import Base, engine
from timetrack.domains.employees.router import router as employee_router
from timetrack.domains.time_tracking.router import router as time_tracking_router

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employee_router)
app.include_router(time_tracking_router)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request parameters",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={ValueError: str}),
        },
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.on_event("startup")
def startup_event() -> None:
    if settings.create_schema:
        Base.metadata.create_all(bind=engine)
    logger.info("startup_complete", env=settings.env, create_schema=settings.create_schema)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Time tracking API running", "environment": settings.env}
