#!/usr/bin/env python3
"""
Serve the Cartoon Generator API with uvicorn.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 3000 --no-reload
"""

import argparse
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Serve the Cartoon Generator API")
    parser.add_argument("--host", default=os.getenv("API_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("API_PORT", "8000")))
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload (use in production)",
    )
    args = parser.parse_args()

    uvicorn.run(
        "cartoon_generator.api.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
    )


if __name__ == "__main__":
    main()
