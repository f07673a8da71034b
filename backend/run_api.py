#!/usr/bin/env python3
"""
Start the Trail Lens segment API with auto-reload.

Host and port come from TRAIL_LENS_API_HOST and TRAIL_LENS_API_PORT;
TRAIL_LENS_DEFAULT_ALTITUDE and TRAIL_LENS_LOG_LEVEL are read by the app.

Usage:
    python run_api.py
"""

import uvicorn

from config.settings import APP_NAME, APP_VERSION, ApiConfig, OverlayConfig

if __name__ == "__main__":
    print(f"{APP_NAME} {APP_VERSION}: segments at http://{ApiConfig.HOST}:{ApiConfig.PORT}/api/segments")
    print(f"Default altitude {OverlayConfig.ALTITUDE} m, midpoint method {OverlayConfig.MIDPOINT_METHOD}")

    # reload needs the app as an import string
    uvicorn.run(
        "api.main:app",
        host=ApiConfig.HOST,
        port=ApiConfig.PORT,
        reload=True
    )
