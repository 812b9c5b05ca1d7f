"""
Code Fix Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, fix, workspace
from services.config_manager import ConfigManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting Code Fix Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")
    print(f"[Backend] Edit provider: {config_manager.get('provider', 'openai')}")

    yield
    print("[Backend] Shutting down Code Fix Backend...")


app = FastAPI(
    title="Code Fix Backend",
    description="Proposes code fixes from an edit service and renders them as merged hunks",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the desktop client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Client runs locally
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(fix.router, prefix="/api/fix", tags=["fix"])
app.include_router(workspace.router, prefix="/api/workspace", tags=["workspace"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "code-fix-backend"}


def run():
    """Console entry point - serve on the configured host and port"""
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))


if __name__ == "__main__":
    run()
