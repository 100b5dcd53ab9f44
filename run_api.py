"""FastAPI development server launcher.

Usage:
    python run_api.py

The server will start on http://localhost:8000
API docs available at http://localhost:8000/api/docs
"""

import uvicorn

if __name__ == "__main__":
    print("Starting Daily Five API...")
    print("API docs: http://localhost:8000/api/docs")
    print("Health check: http://localhost:8000/api/health")
    print("\nPress Ctrl+C to stop\n")

    uvicorn.run(
        "dailyfive.interfaces.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
