"""Image generation proxy package.

Architectural role:
    Relays text-to-image prompts to the hosted Hugging Face inference API and
    returns the generated image to callers as a `data:` URL.

Package split:
    - `config`: environment-driven settings and logging setup.
    - `image`: model table, upstream transport, and the generation pipeline.
    - `api`: HTTP, server, and CLI adapters over the image pipeline.
"""
