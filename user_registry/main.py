from fastapi import FastAPI

from user_registry.api.root import router as root_router
from user_registry.api.users import router as users_router
from user_registry.config import get_settings
from user_registry.db.store import UserStore
from user_registry.observability.correlation import CorrelationIdMiddleware
from user_registry.observability.logging import configure_logging
from user_registry.observability.middleware import RequestContextMiddleware
from user_registry.observability.recovery import RecoveryMiddleware


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.user_store = UserStore()

    # Last added runs first: request context -> correlation gate -> recovery -> router.
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=settings.correlation_header,
        path_prefix=settings.correlation_path_prefix,
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(root_router)
    app.include_router(users_router)
    return app


app = create_app()
