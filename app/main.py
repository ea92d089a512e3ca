import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import (
    APP_HOST,
    APP_NAME,
    APP_PORT,
    APP_VERSION,
    CORS_ORIGINS,
    DEBUG,
    SEED_DEMO_DATA,
)
from database.init import Base, SessionLocal, engine
from database.seed import seed_demo_data
from responses.error import bad_request_error, error_for_status, internal_server_error
from responses.success import data_response
from routes import (
    auth_routes,
    bike_routes,
    booking_routes,
    dashboard_routes,
    user_routes,
)
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    if SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()
    logger.info("%s %s started", APP_NAME, APP_VERSION)
    yield


app = FastAPI(title=APP_NAME, version=APP_VERSION, debug=DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = error_for_status(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return bad_request_error("; ".join(messages) or "Invalid request")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_server_error()


api_router = APIRouter(prefix="/api")


@api_router.get("/health", tags=["Health"])
def health():
    return data_response(auth_routes.health_payload())


api_router.include_router(auth_routes.router)
api_router.include_router(user_routes.router)
api_router.include_router(bike_routes.router)
api_router.include_router(booking_routes.router)
api_router.include_router(dashboard_routes.router)

app.include_router(api_router)


@app.get("/")
def read_root():
    return {"name": APP_NAME, "version": APP_VERSION}


if __name__ == "__main__":
    uvicorn.run("main:app", host=APP_HOST, port=APP_PORT, reload=DEBUG)
