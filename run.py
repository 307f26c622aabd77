"""
Run the API server on port 5010.
Usage: python3 run.py   (from the project root)
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 5010)),
        reload=True,
    )
