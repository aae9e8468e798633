from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from pizza_pension.api.v1.routes.api import router as api_router
from pizza_pension.api.v1.routes.auth import router as auth_router
from pizza_pension.api.v1.routes.registration import router as registration_router

from pizza_pension.core.config import (
    PROJECT_NAME,
    VERSION,
    DESCRIPTION,
    DEBUG,
    DOCS_URL,
    API_PREFIX,
    SESSION_COOKIE_NAME,
    HOST,
    PORT,
    RELOAD,
)
from pizza_pension.core.errors import register_exception_handlers
from pizza_pension.core.events import lifespan
from pizza_pension.core.middleware.debug_middleware import debug_middleware

# Reachable without a session
PUBLIC_PATHS = {
    f"{API_PREFIX}/health",
    f"{API_PREFIX}/register",
    f"{API_PREFIX}/login",
    f"{API_PREFIX}/logout",
}


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "SessionCookie": {
            "type": "apiKey",
            "in": "cookie",
            "name": SESSION_COOKIE_NAME,
        },
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }

    # Admin routes accept either the cookie or the same token as a Bearer header
    for path, operations in openapi_schema["paths"].items():
        if path in PUBLIC_PATHS:
            continue
        for operation in operations.values():
            operation["security"] = [
                {"SessionCookie": []},
                {"BearerAuth": []}
            ]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def get_application() -> FastAPI:
    app = FastAPI(
        title=PROJECT_NAME,
        debug=DEBUG,
        version=VERSION,
        description=DESCRIPTION,
        docs_url=DOCS_URL,
        lifespan=lifespan,
    )

    # Public health endpoint
    app.include_router(api_router, prefix=API_PREFIX)

    # Login, logout and current admin
    app.include_router(auth_router, prefix=API_PREFIX)

    # Public submission plus admin-only listing, summary, export and delete
    app.include_router(registration_router, prefix=API_PREFIX)

    register_exception_handlers(app)

    if DEBUG:
        app.middleware("http")(debug_middleware)

    app.openapi = lambda: custom_openapi(app)

    return app


app = get_application()


def run() -> None:
    import uvicorn

    uvicorn.run("pizza_pension.main:app", host=HOST, port=PORT, reload=RELOAD)
