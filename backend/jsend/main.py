from fastapi import FastAPI
from starlette.responses import Response

from jsend import __version__
from jsend.api.handlers import install_exception_handlers
from jsend.api.response import jsend_response
from jsend.core.config import Settings, get_settings
from jsend.core.logging_config import configure_logging
from jsend.core.middleware import RequestLoggingMiddleware
from jsend.envelope import Envelope
from jsend.schemas.envelope import JSendBody


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, app_env=settings.app_env)

    app = FastAPI(title=settings.app_name, version=__version__)
    app.add_middleware(RequestLoggingMiddleware)
    install_exception_handlers(app)

    @app.get("/health", response_model=JSendBody)
    async def health() -> Response:
        envelope = Envelope.strict({"app": settings.app_name, "version": __version__}).code(200)
        return jsend_response(envelope)

    return app
