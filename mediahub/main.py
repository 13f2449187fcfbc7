from contextlib import asynccontextmanager

from fastapi import FastAPI

from mediahub.api.v1.endpoints.gdrive import close_http
from mediahub.api.v1.router import router as v1_router
from mediahub.core.telemetry import setup_telemetry


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_http()


app = FastAPI(title="Media Hub API", version="0.1.0", lifespan=lifespan)

setup_telemetry(app)
app.include_router(v1_router)
