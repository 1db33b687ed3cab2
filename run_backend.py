#!/usr/bin/env python
"""Run the tasklist development server."""
import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "tasklist.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
