# app/main.py

"""SkillSnap API - portfolio projects and skills with a cache-aside read path."""

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.auth import request_validation_handler
from app.configs import settings
from app.errors import (
    CacheExceptionError,
    DatabaseError,
    PasswordHashingError,
    UserAuthenticationError,
    ValidationError,
    auth_exception_handler,
    cache_exception_handler,
    create_unexpected_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    validation_error_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring.logging import get_logger
from app.monitoring.prometheus import setup_prometheus
from app.routes import (
    auth_router,
    cache_router,
    health_router,
    portfolio_user_router,
    project_router,
    seed_router,
    skill_router,
)

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Portfolio projects and skills API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

api_router = APIRouter(prefix="/api")

routes = [
    skill_router,
    project_router,
    portfolio_user_router,
    seed_router,
    auth_router,
    cache_router,
]

_ = [api_router.include_router(router) for router in routes]
app.include_router(api_router)
app.include_router(health_router)

errors = [
    (RequestValidationError, request_validation_handler),
    (ValidationError, validation_error_handler),
    (UserAuthenticationError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (CacheExceptionError, cache_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (Exception, create_unexpected_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter

setup_prometheus(app)


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    responses={
        200: {
            "content": {
                "application/json": {"example": {"message": "Welcome to SkillSnap API"}},
            },
        },
    },
    operation_id="root_access",
)
@limiter.limit("30/minute")
async def root(request: Request) -> dict[str, str]:
    return {"message": f"Welcome to {settings.APP_NAME}"}
