"""
Server entrypoint for the image generation proxy.

Configures logging from `LOG_LEVEL` and serves `imageproxy.api.http_api.app`
with uvicorn.
"""

import argparse
import os

import uvicorn

from imageproxy.config import configure_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the image generation proxy server.")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=os.getenv("PORT", "8000"))
    args = parser.parse_args(argv)

    configure_logging()
    uvicorn.run("imageproxy.api.http_api:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
