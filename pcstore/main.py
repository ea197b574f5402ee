# pcstore/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pcstore.api import include_routers
from pcstore.data.database import init_db
from pcstore.data.seed import seed
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    try:
        init_db()
        seed()
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    logger.info("Database ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="PC Store",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal database error"})

    return include_routers(app)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
