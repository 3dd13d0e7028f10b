"""Result contracts passed between the upstream client and the service layer.

Control-flow interaction:
    `client.send_inference_request` returns either `UpstreamSuccess` or
    `UpstreamFailure` instead of raising on non-2xx responses. The service maps
    both onto a `GenerationResult`, which the API adapters translate into their
    own transport (JSON response or CLI output).

Transport-level exceptions (connection errors, DNS failures) are not modeled
here; they propagate to the adapter's outer boundary.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UpstreamSuccess:
    """Raw image bytes returned by the inference API."""

    content: bytes


@dataclass(frozen=True)
class UpstreamFailure:
    """Non-2xx upstream response reduced to its status and error message."""

    status_code: int
    message: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation attempt in HTTP terms.

    Attributes:
        status_code: HTTP status the adapter should reply with.
        body: JSON body, `{"imageUrl": ...}` on success or `{"error": ...}`.
    """

    status_code: int
    body: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @classmethod
    def error(cls, status_code: int, message: str) -> "GenerationResult":
        return cls(status_code=status_code, body={"error": message})
