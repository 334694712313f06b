"""Plain-text rendering of a status snapshot for operators."""
from puma_stats.schemas.status import SnapshotTotals, StatusSnapshot, WorkerStatus

PLACEHOLDER = "—"


def _show(value: int | str | None) -> str:
    return PLACEHOLDER if value is None else str(value)


def aggregate(snapshot: StatusSnapshot) -> SnapshotTotals:
    """Sum thread usage across workers; absent counters count as zero."""
    workers = snapshot.worker_status
    return SnapshotTotals(
        worker_count=len(workers),
        running=sum(w.running or 0 for w in workers),
        max_threads=sum(w.max_threads or 0 for w in workers),
        backlog=sum(w.backlog or 0 for w in workers),
    )


def format_worker(worker: WorkerStatus) -> str:
    return (
        f"worker {worker.index}: "
        f"threads {_show(worker.running)}/{_show(worker.max_threads)}, "
        f"backlog {_show(worker.backlog)}, "
        f"pool capacity {_show(worker.pool_capacity)}, "
        f"requests {_show(worker.requests_count)}, "
        f"oldest request {_show(worker.oldest_request_start)}"
    )


def format_totals(totals: SnapshotTotals) -> str:
    return f"total: threads {totals.running}/{totals.max_threads} used, backlog {totals.backlog}"


def render_lines(snapshot: StatusSnapshot) -> list[str]:
    lines = [format_worker(w) for w in snapshot.worker_status]
    lines.append(format_totals(aggregate(snapshot)))
    return lines


def render(snapshot: StatusSnapshot) -> str:
    return "\n".join(render_lines(snapshot))
