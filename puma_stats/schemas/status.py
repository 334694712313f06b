from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class WorkerStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    running: int | None = Field(default=None, ge=0)
    max_threads: int | None = Field(
        default=None, validation_alias=AliasChoices("max_threads", "maxThreads")
    )
    backlog: int | None = Field(default=None, ge=0)
    pool_capacity: int | None = Field(
        default=None, validation_alias=AliasChoices("pool_capacity", "poolCapacity")
    )
    requests_count: int | None = Field(
        default=None, validation_alias=AliasChoices("requests_count", "requestsCount")
    )
    # kept verbatim as sent by Puma
    oldest_request_start: str | None = Field(
        default=None, validation_alias=AliasChoices("oldest_request_start", "oldestRequestStart")
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_last_status(cls, data: Any) -> Any:
        """Puma reports per-worker counters under a nested ``last_status`` object."""
        if isinstance(data, dict) and isinstance(data.get("last_status"), dict):
            flat = dict(data["last_status"])
            flat.update((k, v) for k, v in data.items() if k != "last_status")
            return flat
        return data

    @field_validator("oldest_request_start", mode="before")
    @classmethod
    def blank_timestamp_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class StatusSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    worker_status: tuple[WorkerStatus, ...]

    @field_validator("worker_status")
    @classmethod
    def unique_indexes(cls, workers: tuple[WorkerStatus, ...]) -> tuple[WorkerStatus, ...]:
        seen: set[int] = set()
        for worker in workers:
            if worker.index in seen:
                raise ValueError(f"duplicate worker index {worker.index}")
            seen.add(worker.index)
        return workers


class SnapshotTotals(BaseModel):
    worker_count: int
    running: int
    max_threads: int
    backlog: int


class StatsResponse(BaseModel):
    workers: list[WorkerStatus]
    totals: SnapshotTotals
