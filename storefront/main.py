from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from storefront.config import LOG_LEVEL
from storefront.routers import admin, cart, checkout
from storefront.utils.logger import setup_logging

log = logging.getLogger(__name__)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    log.info("[startup] Motor de reconciliación listo.")
    yield
    log.info("[shutdown] App finalizada correctamente.")


# --- Inicializacion de la app ---
app = FastAPI(
    title="Storefront State API",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Routers ---
app.include_router(cart.router)
app.include_router(checkout.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    return {"message": "API de reconciliación de estado del storefront en linea"}
