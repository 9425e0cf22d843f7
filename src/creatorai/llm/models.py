from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..memory.models import utc_now


class GenerationOptions(BaseModel):
    """Per-call sampling and behaviour configuration.

    Every field has an explicit default. Client-wide defaults are a
    GenerationOptions too; per-call options override only the fields
    they explicitly set (see ``resolve``).
    """

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    top_k: int = Field(default=40, ge=1, description="Top-k sampling")
    top_p: float = Field(default=0.95, ge=0.0, le=1.0, description="Nucleus sampling mass")
    max_tokens: int = Field(default=2048, ge=1, description="Maximum output tokens")
    use_history: bool = Field(default=True, description="Fold recent history into the prompt")
    context: str | None = Field(default=None, description="Extra context appended to the preamble")

    def resolve(self, overrides: "GenerationOptions | None") -> "GenerationOptions":
        """Layer explicitly-set fields of ``overrides`` over these defaults."""
        if overrides is None:
            return self
        return self.model_copy(update=overrides.model_dump(exclude_unset=True))

    def to_generation_config(self) -> dict[str, Any]:
        """Build the wire-format ``generationConfig`` object."""
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_tokens,
        }


class StatsSnapshot(BaseModel):
    """Point-in-time copy of request statistics with derived metrics."""

    model_config = ConfigDict(frozen=True)

    total_requests: int
    successful_requests: int
    failed_requests: int
    total_tokens: int
    last_request_time: datetime | None
    average_tokens: float = Field(description="total_tokens / total_requests, 0 without requests")
    success_rate: int = Field(description="Percentage of successful requests, 0 without requests")


class RequestStats(BaseModel):
    """Monotonic request counters owned by one assistant instance."""

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_tokens: int = 0
    last_request_time: datetime | None = None

    def record_success(self, tokens: int) -> None:
        self.total_requests += 1
        self.successful_requests += 1
        self.total_tokens += tokens

    def record_failure(self) -> None:
        self.total_requests += 1
        self.failed_requests += 1

    @property
    def average_tokens(self) -> float:
        if self.total_requests == 0:
            return 0
        return self.total_tokens / self.total_requests

    @property
    def success_rate(self) -> int:
        if self.total_requests == 0:
            return 0
        # Round half up, not to even
        return int(100 * self.successful_requests / self.total_requests + 0.5)

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            total_requests=self.total_requests,
            successful_requests=self.successful_requests,
            failed_requests=self.failed_requests,
            total_tokens=self.total_tokens,
            last_request_time=self.last_request_time,
            average_tokens=self.average_tokens,
            success_rate=self.success_rate,
        )


class ErrorInfo(BaseModel):
    """Descriptor of a failed request."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Human-readable error message")
    kind: str = Field(description="Failure category: network, timeout, remote, contract or internal")
    code: str = Field(description="Machine-readable code (HTTP status for remote errors)")


class Generation(BaseModel):
    """Raw output of a backend before it is folded into a result."""

    model_config = ConfigDict(frozen=True)

    text: str
    tokens: int = 0


class ChatSuccess(BaseModel):
    """Result of a request that produced a completion."""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    message: str = Field(description="Completion text")
    tokens: int = Field(default=0, description="Tokens reported for this request")
    request_id: str
    timestamp: datetime = Field(default_factory=utc_now)
    stats: StatsSnapshot


class ChatFailure(BaseModel):
    """Result of a request that failed; ``message`` holds the fallback reply."""

    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    message: str = Field(description="Fallback reply")
    error: ErrorInfo
    error_id: str
    timestamp: datetime = Field(default_factory=utc_now)
    stats: StatsSnapshot


ChatResult = ChatSuccess | ChatFailure


class ConnectionReport(BaseModel):
    """Outcome of a connectivity probe."""

    model_config = ConfigDict(frozen=True)

    connected: bool
    model: str
    latency_ms: float = Field(description="Round-trip time of the probe in milliseconds")
    tested_at: datetime = Field(default_factory=utc_now)
    response: str = Field(default="", description="Reply text (fallback text when disconnected)")
    error: ErrorInfo | None = None
