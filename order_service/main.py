import logging

import uvicorn

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from order_service.config import HOST, PORT
from order_service.database import Base, engine
from order_service.logging_config import configure_logging
from order_service.routes import router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Order Service")

app.include_router(router)

Base.metadata.create_all(bind=engine)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health():
    return {"ok": True}


def run():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
