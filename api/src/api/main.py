import json
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from storage.database.base import init_db
from storage.errors import NotFoundError, PersistenceError, ValidationError
from storage.logging_setup import setup_logging
from storage.settings import load_config


class UnicodeJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False).encode("utf-8")

from api.controller.task import router as task_router

_STATUS_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}


def problem(status: int, detail: str, errors: Optional[List[dict]] = None) -> UnicodeJSONResponse:
    """RFC 7807 problem document."""
    content = {
        "type": f"https://httpstatuses.com/{status}",
        "title": _STATUS_TITLES.get(status, "Unknown Error"),
        "status": status,
        "detail": detail,
    }
    if errors is not None:
        content["errors"] = errors
    return UnicodeJSONResponse(content, status_code=status, media_type="application/problem+json")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    setup_logging(config["log_level"])
    init_db(config["database_url"])
    yield


app = FastAPI(title="tasktrail API", default_response_class=UnicodeJSONResponse, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return problem(400, "Request validation failed", errors=exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"path": [str(p) for p in err["loc"] if p != "body"] or ["body"], "message": err["msg"]}
        for err in exc.errors()
    ]
    return problem(400, "Request validation failed", errors=errors)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return problem(404, str(exc))


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("{} {} failed: {}", request.method, request.url.path, exc)
    return problem(500, "An unexpected error occurred")


api_router = APIRouter(prefix="/api")
api_router.include_router(task_router)


@api_router.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(api_router)


def main():
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
