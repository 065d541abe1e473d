import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from formbuilder.config import Settings, settings
from formbuilder.database import KeyValueStore, PersistenceGateway, build_store
from formbuilder.deps import get_custom_field_service, get_form_service
from formbuilder.errors import InvalidField, NotFound, PersistenceFailure
from formbuilder.routers.custom_fields import router as custom_fields_router
from formbuilder.routers.field_types import router as field_types_router
from formbuilder.routers.fields import build_field_router
from formbuilder.routers.forms import router as forms_router
from formbuilder.routers.submissions import router as submissions_router
from formbuilder.schemas import CustomFieldTemplate, Form

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> FastAPI:
    app_settings = app_settings or settings
    logging.basicConfig(level=app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        handle = store or build_store(app_settings)
        await handle.open()
        app.state.gateway = PersistenceGateway(handle, latency_ms=app_settings.SIMULATED_LATENCY_MS)
        logger.info("Storage opened (%s)", type(handle).__name__)
        try:
            yield
        finally:
            await handle.close()
            logger.info("Storage closed")

    app = FastAPI(title="Form Builder Backend (FastAPI)", lifespan=lifespan)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidField)
    async def invalid_field_handler(request: Request, exc: InvalidField):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    app.include_router(forms_router)
    app.include_router(build_field_router("/api/forms", "forms", get_form_service, Form))
    app.include_router(custom_fields_router)
    app.include_router(build_field_router("/api/custom-fields", "custom-fields", get_custom_field_service, CustomFieldTemplate))
    app.include_router(submissions_router)
    app.include_router(field_types_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
