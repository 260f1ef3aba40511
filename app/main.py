import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from config import DEBUG, APP_HOST, APP_PORT, DATA_SOURCE
from database.init import Base, engine
from routes import (
    auth_routes,
    property_routes,
    booking_routes,
    admin_routes,
)
from utils.exceptions import MarketplaceError
from utils.logger import configure_logging
from responses.base import build_response
from responses.success import success_response
from responses.error import bad_request_error, error_response, internal_server_error

configure_logging()
logger = logging.getLogger(__name__)


def init_database():
    """Create the tables, keep serving without a database if it is unreachable"""
    if DATA_SOURCE == "memory":
        return
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.warning("Database unavailable, running in degraded mode: %s", e)


init_database()

app = FastAPI(title="House Rent API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return bad_request_error("Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return bad_request_error(f"{field}: {message}" if field else message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = f"API endpoint not found: {request.method} {request.url.path}"
        return build_response(404, False, message=message, error="not_found")
    return build_response(exc.status_code, False, message=str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_server_error("Something went wrong!")


app.include_router(auth_routes.router)
app.include_router(property_routes.router)
app.include_router(booking_routes.router)
app.include_router(admin_routes.router)


@app.get("/")
def read_root():
    return {"name": "House Rent API", "version": "1.0.0"}


@app.get("/api/test")
def api_test():
    return success_response("API is working!")


if __name__ == "__main__":
    uvicorn.run("main:app", host=APP_HOST, port=APP_PORT, reload=DEBUG)
