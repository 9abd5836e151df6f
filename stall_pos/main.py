from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stall_pos.api.v1.routes_cart import router as cart_router
from stall_pos.api.v1.routes_checkout import router as checkout_router
from stall_pos.api.v1.routes_products import router as products_router
from stall_pos.api.v1.routes_reports import router as reports_router
from stall_pos.api.v1.routes_session import router as session_router
from stall_pos.core.config import settings
from stall_pos.core.logging import configure_logging
from stall_pos.db.schema import init_models
from stall_pos.domain.errors import (
    AuthError,
    BusinessError,
    CheckoutFailedError,
    NotFoundError,
    PermissionDenied,
    ValidationFailed,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.AUTO_CREATE_SCHEMA:
        await init_models()
    yield


app = FastAPI(title="stall-pos", lifespan=lifespan)

app.include_router(session_router)
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(reports_router)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(404, exc)


@app.exception_handler(ValidationFailed)
async def validation_handler(request: Request, exc: ValidationFailed):
    return _error(422, exc)


@app.exception_handler(BusinessError)
async def business_handler(request: Request, exc: BusinessError):
    return _error(409, exc)


@app.exception_handler(PermissionDenied)
async def permission_handler(request: Request, exc: PermissionDenied):
    return _error(403, exc)


@app.exception_handler(AuthError)
async def auth_handler(request: Request, exc: AuthError):
    return _error(401, exc)


@app.exception_handler(CheckoutFailedError)
async def checkout_failed_handler(request: Request, exc: CheckoutFailedError):
    return _error(502, exc)


@app.get("/health")
async def health():
    return {"status": "ok"}
