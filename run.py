#!/usr/bin/env python3
"""Run script for trackl (development server with reload)."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "trackl.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=5000,
        reload=True
    )
