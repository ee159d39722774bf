"""FastAPI application exposing the launcher's plugin matching over HTTP."""

import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv('.env')

# Configure logging BEFORE importing any modules that use logger
log_level = os.getenv('LOG_LEVEL', 'INFO')
logging.basicConfig(
    level=getattr(logging, log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Import after logging is configured
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from launcher import __version__
from launcher.dependencies import get_plugin_manager
from launcher.routers import plugins_router

# Create FastAPI app
app = FastAPI(
    title="Launcher Plugin Service",
    description="Matches launcher input against registered plugins",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plugins_router)


@app.get("/")
async def root():
    return {"message": "Launcher Plugin Service API", "docs": "/docs"}


@app.on_event("startup")
async def startup_event():
    """Discover and register plugins."""
    logger.info("Starting Launcher Plugin Service")
    manager = get_plugin_manager()
    await manager.load_all()


@app.on_event("shutdown")
async def shutdown_event():
    """Run plugin unload hooks."""
    logger.info("Shutting down Launcher Plugin Service")
    await get_plugin_manager().unload_all()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "9090"))
    uvicorn.run("app:app", host="0.0.0.0", port=port, reload=True)
