import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from routers import items

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.is_dev():
        logger.info(
            f"Environment '{config.ENVIRONMENT}': using local DynamoDB at {config.DYNAMODB_ENDPOINT}"
        )
    else:
        logger.info(
            f"Environment '{config.ENVIRONMENT}': using default AWS session"
        )
    yield


# /list/ などのスラッシュ付きパスはリダイレクトせず 404 にする
app = FastAPI(lifespan=lifespan, redirect_slashes=False)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return PlainTextResponse(
            "404 page not found\n", status_code=status.HTTP_404_NOT_FOUND
        )
    # ALL_METHODS に含まれないメソッド (TRACE など) も 405 ではなく 404 にする
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return items.method_not_supported()
    return await http_exception_handler(request, exc)


# Include routers
app.include_router(items.router, tags=["items"])


if __name__ == "__main__":
    import uvicorn

    print(f"\nStarting server at port {config.PORT}\n")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
