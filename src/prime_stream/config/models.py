from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from prime_stream.domain.tunables import (
    BATCH_SIZE,
    GENESIS_EPOCH_MS,
    LIVE_EDGE_PX,
    MAX_BUFFER_SIZE,
    PREFILL_COUNT,
    STREAM_VELOCITY,
    SYNC_THRESHOLD,
    TRICKLE_INTERVAL_MS,
)

# Config models map YAML sections to typed structures. Every field defaults to the stream tunables.


class StreamSection(BaseModel):
    # Cursor derivation. All viewers of one stream must share epoch_ms and velocity.
    model_config = ConfigDict(extra="forbid")
    epoch_ms: int = GENESIS_EPOCH_MS
    velocity: int = Field(default=STREAM_VELOCITY, ge=1)
    prefill_count: int = Field(default=PREFILL_COUNT, ge=0)


class BufferSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_size: int = Field(default=MAX_BUFFER_SIZE, ge=1)


class RevealSection(BaseModel):
    # Pacing of how much buffered history the consumer sees.
    model_config = ConfigDict(extra="forbid")
    batch_size: int = Field(default=BATCH_SIZE, ge=1)
    sync_threshold: int = Field(default=SYNC_THRESHOLD, ge=0)
    trickle_interval_ms: int = Field(default=TRICKLE_INTERVAL_MS, ge=1)
    live_edge_px: int = Field(default=LIVE_EDGE_PX, ge=0)


class GeneratorSection(BaseModel):
    # search_budget caps candidates tested per generator step; null searches until found.
    # step_interval_ms spaces generator steps; 0 yields back to the scheduler without delay.
    model_config = ConfigDict(extra="forbid")
    oracle: Literal["trial", "miller_rabin"] = "trial"
    search_budget: int | None = Field(default=None, ge=1)
    step_interval_ms: float = Field(default=0, ge=0)


class LoggingSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stdout", "jsonl", "none"] = "none"
    path: str | None = None

    @model_validator(mode="after")
    def require_jsonl_path(self) -> LoggingSection:
        # For the jsonl sink a path is required to avoid silent defaults.
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when sink is 'jsonl'")
        return self


class StreamConfig(BaseModel):
    # StreamConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    stream: StreamSection = Field(default_factory=StreamSection)
    buffer: BufferSection = Field(default_factory=BufferSection)
    reveal: RevealSection = Field(default_factory=RevealSection)
    generator: GeneratorSection = Field(default_factory=GeneratorSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)


def default_config() -> StreamConfig:
    return StreamConfig()
