from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import CORS_ORIGINS
from app.errors import SEOServiceError
from app.logger_config import logger
from app.routers import router  # Import the router from routers.py

app = FastAPI(title="SEO Report Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(SEOServiceError)
async def seo_service_error_handler(request: Request, exc: SEOServiceError):
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Covers fastapi.HTTPException raised in routes and router-level 404/405
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "detail": None},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} rejected: {problems}")
    return JSONResponse(status_code=422, content={"error": "Invalid request", "detail": problems})


@app.get("/health", response_class=PlainTextResponse)
def health():
    return "OK"


# Include the router with an optional prefix
app.include_router(router, prefix="/api/v1")
