from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel_site.api.routes import admin_panel, auth, profile, realtime, resources, site, uploads
from hotel_site.core.auth_utils import SIGN_IN_REDIRECT
from hotel_site.core.config import CORS_ORIGINS
from hotel_site.core.errors import (
    GENERIC_ERROR_MESSAGE, AuthorizationError, RecordNotFound, SiteError, ValidationFailed
)
from hotel_site.core.logging_config import get_logger
from hotel_site.core.redis import get_redis_client
from hotel_site.resources.subscription import ChangeBroker, ChangeSubscription

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    broker = ChangeBroker(await get_redis_client())
    app.state.broker = broker
    app.state.subscriptions = ChangeSubscription(broker)
    logger.info("Hotel site API started")

    yield

    app.state.subscriptions.close()
    await broker.close()
    logger.info("Hotel site API stopped")


app = FastAPI(
    title="Hotel Site API",
    version="1.0.0",
    description="Public hotel site content and the admin API that manages it",
    lifespan=lifespan
)


# Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------- ERROR HANDLERS --------
@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=422, content={"detail": {"errors": exc.errors}})


@app.exception_handler(AuthorizationError)
async def authorization_handler(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=SIGN_IN_REDIRECT)


@app.exception_handler(RecordNotFound)
async def not_found_handler(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(SiteError)
async def site_error_handler(request: Request, exc: SiteError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"UNHANDLED: {request.method} {request.url} -> {exc}")
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_MESSAGE})


# -------- ROUTERS --------
app.include_router(auth.router)
app.include_router(site.router)
app.include_router(profile.router)
app.include_router(admin_panel.router)
for router in resources.routers:
    app.include_router(router)
app.include_router(uploads.router)
app.include_router(realtime.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Hotel site API running"}
