import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_server_settings
from .errors import EmptySeriesError, InvalidSeriesError, InvalidWindowError
from .routes import exports, holdings, performance, series

logger = logging.getLogger(__name__)

settings = get_server_settings()

app = FastAPI(title="Benchmark Dashboard API", version="0.1.0", docs_url="/docs")

cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[cors_origins] if cors_origins != "*" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidWindowError)
async def _invalid_window(_: Request, exc: InvalidWindowError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(EmptySeriesError)
async def _empty_series(_: Request, exc: EmptySeriesError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidSeriesError)
async def _invalid_series(_: Request, exc: InvalidSeriesError) -> JSONResponse:
    logger.error("Base series failed validation: %s", exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


@app.get("/health", tags=["health"])
async def health() -> JSONResponse:
    return JSONResponse({"status": "ok"})


app.include_router(performance.router)
app.include_router(holdings.router)
app.include_router(series.router)
app.include_router(exports.router)
