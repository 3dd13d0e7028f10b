"""Image generation package.

Scope:
    Provides the static model table, the upstream inference client, and the
    generation pipeline used by the HTTP and CLI adapters.

Non-goals:
    - No job queueing or progress polling.
    - No persistence of generated images.
    - No retry policy for upstream failures.
"""
