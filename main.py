#!/usr/bin/env python3
import os

import uvicorn

from eshop.app import create_app

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    host = os.getenv("ESHOP_HOST", "0.0.0.0")
    port = int(os.getenv("ESHOP_PORT", "8000"))
    reload_enabled = os.getenv("ESHOP_DEV_MODE", "false").lower() == "true"

    print(f"Starting eshop order search on {host}:{port}")
    uvicorn.run("main:app", host=host, port=port, reload=reload_enabled)
