"""
Command-line adapter for the image generation proxy.

Architectural role:
- Runs the same generation pipeline as the HTTP endpoint without a server.
- Useful for checking credentials and model presets from a terminal.

Request lifecycle:
1. Parse prompt, model id, and output path from argv.
2. Call `imageproxy.image.service.generate_image` with fresh settings.
3. Write decoded image bytes to `--output`, or print the data URL.

Error handling strategy:
- Error results and unexpected exceptions are printed to stderr and the
  process exits with status 1.
"""

import argparse
import base64
import logging
import sys

from imageproxy.config import configure_logging, load_settings
from imageproxy.image.models import IMAGE_MODELS
from imageproxy.image.service import generate_image

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Generate one image through the inference proxy.")
    parser.add_argument("prompt", help="Text prompt for the image.")
    parser.add_argument(
        "--model",
        dest="model_id",
        choices=sorted(IMAGE_MODELS),
        help="Model id (defaults to DEFAULT_IMAGE_MODEL_ID when set).",
    )
    parser.add_argument("--output", "-o", help="Write the image to this file instead of printing a data URL.")
    return parser


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes embedded in a base64 `data:` URL."""
    _, _, encoded = data_url.partition(";base64,")
    return base64.b64decode(encoded)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        result = generate_image(args.prompt, args.model_id, load_settings())
    except Exception as exc:
        logger.exception("Image generation error")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not result.ok:
        print(f"Error ({result.status_code}): {result.body['error']}", file=sys.stderr)
        return 1

    image_url = result.body["imageUrl"]
    if args.output:
        with open(args.output, "wb") as f:
            f.write(decode_data_url(image_url))
        print(f"Image written to {args.output}")
    else:
        print(image_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
