"""
BioTracker Analyst Backend API

FastAPI application for throwing-motion analysis from pose keypoints.

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8080

API docs available at:
    http://localhost:8080/docs (Swagger UI)
    http://localhost:8080/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as api_router, API_VERSION
from api.websocket import websocket_endpoint
from core.config import get_settings

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup code before app starts accepting requests,
    and cleanup code when app shuts down.
    """
    # Startup
    settings = get_settings()
    logger.info(" BioTracker Analyst API starting up...")
    logger.info(" API docs: http://localhost:8080/docs")
    logger.info(" WebSocket: ws://localhost:8080/ws/throw")
    logger.info(
        f" Filter min_cutoff={settings.min_cutoff} beta={settings.beta} "
        f"d_cutoff={settings.d_cutoff}, {settings.pixels_per_meter} px/m, "
        f"{settings.throwing_side.value}-handed"
    )

    yield  # App runs here

    # Shutdown
    logger.info(" BioTracker Analyst API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="BioTracker Analyst API",
    description="""
    **Throwing Mechanics Analyzer**

    Scores an overhand throw from a pose keypoint timeline.

    ## Features

    - **Adaptive keypoint smoothing** (One Euro filter per coordinate)
    - **Release detection** from peak wrist speed
    - **Velocity estimate** and release-frame body angles
    - **Injury-risk feedback** from a fixed rule set

    ## Endpoints

    - `GET /api/health` - Health check
    - `POST /api/analysis/timeline` - Analyze a keypoint timeline
    - `WS /ws/throw` - Stream keypoint frames, get the report at the end

    ## WebSocket Protocol

    Connect to `/ws/throw` and send frames as JSON:
```json
    {
        "type": "frame",
        "data": {"timestamp": 0.0333, "keypoints": [{"x": 120.0, "y": 80.0, "score": 0.9}]},
        "timestamp": 1704067200000
    }
```
    then `{"type": "end_session"}` to receive the report.
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Mobile client connects over the LAN
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

# Include REST API routes
app.include_router(api_router, prefix="/api")

# WebSocket endpoint
app.websocket("/ws/throw")(websocket_endpoint)


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "BioTracker Analyst API",
        "version": API_VERSION,
        "description": "Throwing Mechanics Analyzer",
        "docs": "/docs",
        "health": "/api/health",
        "websocket": "ws://localhost:8080/ws/throw"
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
        log_level="info"
    )
