"""
FastAPI backend for Trail Lens.

This provides REST API endpoints that turn geographic paths into oriented
segment descriptors, so AR clients can place them without running the
geometry themselves.
"""

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List, Optional, Any
import logging
import io
import sys
import os

# Add parent directory to path to import our modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, LOGGING_CONFIG,
    OverlayConfig, BoxConfig, ApiConfig
)

# Initialize logging
logging.basicConfig(level=LOGGING_CONFIG["level"], format=LOGGING_CONFIG["format"])
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=f"{APP_NAME} API",
    description=APP_DESCRIPTION,
    version=APP_VERSION
)
logger.info(f"API configuration: {ApiConfig.as_dict()}")

# Add CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=ApiConfig.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Import our services
from services.overlay_service import PathOverlay, build_overlay_from_gpx
from core.segments import SegmenterConfig
from core.shapes import make_box_builder
from core.validation import ValidationError


# Pydantic models for API requests/responses
class PointModel(BaseModel):
    latitude: float
    longitude: float
    altitude: Optional[float] = None


class BoxModel(BaseModel):
    width: float = BoxConfig.WIDTH
    height: float = BoxConfig.HEIGHT


class SegmentRequest(BaseModel):
    points: List[PointModel]
    altitude: float = OverlayConfig.ALTITUDE
    tag: Optional[str] = None
    box: Optional[BoxModel] = None
    midpoint_method: str = OverlayConfig.MIDPOINT_METHOD
    strict: bool = OverlayConfig.STRICT


class SegmentSummary(BaseModel):
    count: int
    point_count: int
    total_length_m: float
    mean_length_m: Optional[float]
    min_length_m: Optional[float]
    max_length_m: Optional[float]
    degenerate_count: int
    tag: str
    altitude: float


class SegmentResponse(BaseModel):
    segments: List[Dict[str, Any]]
    summary: SegmentSummary
    metadata: Optional[Dict[str, Any]] = None


def _overlay_response(overlay: PathOverlay, metadata: Optional[Dict[str, Any]] = None) -> SegmentResponse:
    return SegmentResponse(
        segments=overlay.to_records(),
        summary=SegmentSummary(**overlay.summary()),
        metadata=metadata
    )


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"{APP_NAME} API",
        "version": APP_VERSION,
        "endpoints": {
            "POST /api/segments": "Build segments from a list of points",
            "POST /api/segments/gpx": "Build segments from a GPX file",
            "GET /api/config": "Default configuration values",
            "GET /api/health": "Health check endpoint"
        }
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "trail-lens-api"}


@app.get("/api/config")
async def get_config():
    """Get default configuration values."""
    return {
        "defaults": {
            **OverlayConfig.as_dict(),
            "box": BoxConfig.as_dict(),
        },
        "options": {
            "midpoint_method": list(OverlayConfig.MIDPOINT_METHODS),
        },
        "limits": {
            "max_points": ApiConfig.MAX_POINTS,
            "max_upload_size": ApiConfig.MAX_UPLOAD_SIZE,
        }
    }


@app.post("/api/segments", response_model=SegmentResponse)
async def create_segments(request: SegmentRequest):
    """
    Build oriented segments from a list of points.

    Args:
        request: Points, uniform altitude, optional tag, box size and options

    Returns:
        One segment per consecutive pair of points, plus a summary
    """
    if len(request.points) > ApiConfig.MAX_POINTS:
        raise HTTPException(
            status_code=413,
            detail=f"Too many points: {len(request.points)} (max {ApiConfig.MAX_POINTS})"
        )

    try:
        shape_builder = None
        if request.box is not None:
            shape_builder = make_box_builder(width=request.box.width, height=request.box.height)

        config = SegmenterConfig(
            altitude=request.altitude,
            midpoint_method=request.midpoint_method,
            strict=request.strict
        )
        points = [(p.latitude, p.longitude, p.altitude) for p in request.points]

        overlay = PathOverlay(
            points=points,
            tag=request.tag,
            shape_builder=shape_builder,
            config=config
        )
        logger.info(f"Built {len(overlay)} segments from {len(points)} points")
        return _overlay_response(overlay)

    except ValidationError as e:
        logger.warning(f"Rejected segment request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error building segments: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error building segments: {str(e)}")


@app.post("/api/segments/gpx", response_model=SegmentResponse)
async def create_segments_from_gpx(
    file: UploadFile = File(...),
    altitude: Optional[float] = None,
    tag: Optional[str] = None
):
    """
    Build oriented segments from a GPX file.

    Args:
        file: GPX file; tracks, then routes, then waypoints are used
        altitude: Uniform altitude for points without elevation
        tag: Label for all segments (defaults to the GPX name)

    Returns:
        Segments, summary and GPX metadata
    """
    # Validate file type
    if not file.filename or not file.filename.lower().endswith('.gpx'):
        raise HTTPException(status_code=400, detail="Only GPX files are allowed")

    # Read file content
    content = await file.read()

    if len(content) > ApiConfig.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {ApiConfig.MAX_UPLOAD_SIZE / 1024 / 1024:.0f}MB, "
                   f"received {len(content) / 1024 / 1024:.1f}MB"
        )

    # Validate minimum file size (empty files)
    if len(content) < ApiConfig.MIN_UPLOAD_SIZE:
        raise HTTPException(status_code=400, detail="File appears to be empty or corrupted")

    try:
        file_obj = io.BytesIO(content)

        logger.info(f"Processing file: {file.filename}")
        overlay, metadata = build_overlay_from_gpx(file_obj, altitude=altitude, tag=tag)

        metadata = {
            key: (value.isoformat() if hasattr(value, 'isoformat') else value)
            for key, value in metadata.items()
        }
        metadata['filename'] = file.filename
        return _overlay_response(overlay, metadata)

    except ValidationError as e:
        logger.warning(f"Rejected GPX file {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing GPX file: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error processing GPX file: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=ApiConfig.HOST, port=ApiConfig.PORT)
