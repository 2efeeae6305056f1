#!/usr/bin/env python3
"""
Backend Starter
Starts the FastAPI backend with uvicorn
"""

import uvicorn
import os
import sys

if __name__ == "__main__":
    # Run from the project root so the app package and .env resolve
    script_dir = os.path.dirname(os.path.abspath(__file__))
    os.chdir(script_dir)
    sys.path.insert(0, script_dir)

    reload = "--reload" in sys.argv
    port = int(os.getenv("PORT", "8000"))

    print(f"🚀 Starting EventHub API from: {script_dir}")
    print(f"📡 Server will be available at: http://localhost:{port}")
    print(f"📄 API docs will be available at: http://localhost:{port}/docs")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=reload,
        reload_dirs=["./app"] if reload else None,
    )
