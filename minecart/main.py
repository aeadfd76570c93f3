"""FastAPI application serving the catalog routes."""
import logging
import os

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from minecart import __version__
from minecart.api.catalog import router as catalog_router

load_dotenv(find_dotenv(usecwd=True), override=True)

# LOG_LEVEL overrides the default INFO level
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s %(message)s")

app = FastAPI(title="minecart", version=__version__, description="Read-only access to the flattened content graph")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("MINECART_CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(catalog_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
