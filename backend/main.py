"""
r0tor Rotor Driver - Main Entry Point

Run with: uvicorn main:app --reload --port 8000
"""

import sys
from pathlib import Path

# Add backend to path for imports
backend_path = Path(__file__).parent
sys.path.insert(0, str(backend_path))

import uvicorn
from fastapi import FastAPI

from api.app import create_app
from api.dependencies import get_app_state
from core.errors import RotorError
from core.logger import log_warn
from rotator import HAMBITS_CAPS


def create_full_app() -> FastAPI:
    """Create the API app with health check and lifecycle hooks"""
    app = create_app()

    @app.on_event("startup")
    async def startup_event():
        """Print banner and capabilities"""
        caps = HAMBITS_CAPS
        print("=" * 50)
        print(f"  {caps.mfg_name} {caps.model_name} v{caps.version} ({caps.status})")
        print("=" * 50)
        print()
        print("Capabilities:")
        print(f"  Azimuth:   {caps.min_az:.0f}..{caps.max_az:.0f} deg")
        print(f"  Elevation: {caps.min_el:.0f}..{caps.max_el:.0f} deg")
        print(f"  Serial:    {caps.serial_rate_max} {caps.serial_data_bits}N{caps.serial_stop_bits}")
        print(f"  Timeout:   {caps.timeout_ms}ms x {caps.retry} retries")
        print()
        print("API ready at http://localhost:8000")
        print("Docs at http://localhost:8000/docs")
        print()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop the rotor before exiting"""
        state = get_app_state()
        try:
            if state.is_connected:
                print("[SHUTDOWN] Stopping rotor and disconnecting...")
                state.disconnect()
        except RotorError as e:
            log_warn(f"[SHUTDOWN] Error during cleanup: {e}")

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        state = get_app_state()
        return {
            "status": "ok",
            "version": HAMBITS_CAPS.version,
            "connected": state.is_connected,
            "model": HAMBITS_CAPS.key,
        }

    return app


# Create app instance
app = create_full_app()


# === Run directly ===

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
