"""Provider protocols - abstract interfaces for external services."""

from dataclasses import dataclass, field
from typing import Literal, Protocol

GenerationRole = Literal["user", "model"]


@dataclass(frozen=True)
class GenerationTurn:
    """A role-tagged text turn in the generation service's vocabulary."""

    role: GenerationRole
    text: str


@dataclass(frozen=True)
class GenerationRequest:
    """Request payload for a single generation call."""

    turns: tuple[GenerationTurn, ...]
    temperature: float = 0.7
    max_output_tokens: int = 512
    metadata: dict[str, str] = field(default_factory=dict, compare=False)


class GenerationProvider(Protocol):
    """Abstract interface for the external text generation service.

    Implementations raise the ProviderError family (rate limited, HTTP error,
    timeout, transport, malformed response) and return the reply text on
    success.
    """

    @property
    def provider_name(self) -> str:
        """Get the provider name for logging/metrics."""
        ...

    @property
    def model(self) -> str:
        """Model identifier used for calls."""
        ...

    async def generate(self, request: GenerationRequest) -> str:
        """Generate a reply for the request."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
