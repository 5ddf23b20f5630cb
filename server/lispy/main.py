from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lispy.api.routes import evaluate
from lispy.core.config import get_settings
from lispy.core.exceptions import register_exception_handlers
from lispy.core.logging import configure_logging
from lispy.core.middleware import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Application factory for the Lispy evaluator service.
    """

    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Evaluates prefix arithmetic expressions.",
        version=settings.api_version,
    )

    cors_origins = settings.resolved_cors_origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(evaluate.router)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
