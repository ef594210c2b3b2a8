from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.config.settings import Settings
from app.database import Database
from app.routers import auth, agents, team_members, tasks, dashboard
from app.utils.errors import AgentConnectError, InternalError

logger = logging.getLogger(__name__)

# Pydantic error types that mean "the field was not really supplied"
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def describe_validation_errors(errors) -> dict:
    """Collapse FastAPI validation errors into the {"error", "required"} shape"""
    missing = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") in MISSING_ERROR_TYPES and len(loc) > 1 and loc[0] == "body":
            field = str(loc[-1])
            if field not in missing:
                missing.append(field)
    if missing:
        return {"error": "Missing required fields", "required": missing}

    if not errors:
        return {"error": "Invalid request"}

    error = errors[0]
    loc = tuple(error.get("loc", ()))
    if loc == ("body",):
        return {"error": "Request body is required"}

    message = str(error.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    field = loc[-1] if loc else "request"
    return {"error": f"Invalid value for '{field}': {message}"}


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(AgentConnectError)
    async def agentconnect_error_handler(request: Request, exc: AgentConnectError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=describe_validation_errors(exc.errors()),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    settings = settings or Settings()
    database = database or Database(settings.database_url, sslmode=settings.db_sslmode)

    app = FastAPI(title="AgentConnect API")
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Route registration
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(agents.router, prefix="/api/agents", tags=["Agents"])
    app.include_router(team_members.router, prefix="/api/team-members", tags=["Team Members"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

    @app.on_event("startup")
    def startup_event():
        logger.info("Starting AgentConnect API...")
        if settings.uses_default_secret:
            logger.warning("SECRET_KEY is not set; tokens are signed with the default key")
        if settings.auto_create_tables:
            database.create_tables()

    @app.on_event("shutdown")
    def shutdown_event():
        logger.info("Shutting down AgentConnect API...")
        database.dispose()

    # Root route
    @app.get("/")
    def read_root():
        return {"message": "AgentConnect API"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


settings = Settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app(settings)
