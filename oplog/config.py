from __future__ import annotations

from dataclasses import dataclass, field

from .policy import ErrorPolicy


@dataclass(frozen=True)
class DecoderConfig:
    max_batch_depth: int = 100
    require_noop_session: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if isinstance(self.max_batch_depth, bool) or not isinstance(self.max_batch_depth, int):
            raise ValueError("max_batch_depth must be an integer")
        if self.max_batch_depth <= 0:
            raise ValueError(
                "max_batch_depth must be > 0; a depth of 0 would reject every applyOps batch"
            )


@dataclass(frozen=True)
class ReaderConfig:
    error_policy: ErrorPolicy = ErrorPolicy.RAISE
    decoder: DecoderConfig = field(default_factory=DecoderConfig)

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.error_policy, ErrorPolicy):
            raise ValueError(f"Unknown error policy: {self.error_policy!r}")
