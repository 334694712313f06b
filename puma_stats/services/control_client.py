import logging

from pydantic import ValidationError

from puma_stats.core.config import settings
from puma_stats.core.exceptions import ParseError
from puma_stats.schemas.status import StatusSnapshot
from puma_stats.services.transport import build_transport

logger = logging.getLogger(__name__)


def decode_snapshot(payload: str) -> StatusSnapshot:
    try:
        return StatusSnapshot.model_validate_json(payload)
    except ValidationError as e:
        logger.warning("Rejected stats payload: %d error(s)", e.error_count())
        raise ParseError(f"Malformed stats response: {e}") from e


class PumaControlClient:
    def __init__(
        self,
        control_url: str | None = None,
        token: str | None = None,
        transport: str | None = None,
        timeout: float | None = None,
    ):
        self.control_url = control_url or settings.control_url
        self.token = token if token is not None else settings.control_token
        self.transport = transport or settings.transport
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.pumactl_bin = settings.pumactl_bin

    async def fetch_snapshot(self) -> StatusSnapshot:
        """Query the control channel once and parse the answer."""
        adapter = build_transport(
            self.transport,
            self.control_url,
            token=self.token,
            timeout=self.timeout,
            pumactl_bin=self.pumactl_bin,
        )
        payload = await adapter.fetch_stats()
        snapshot = decode_snapshot(payload)
        logger.debug("Fetched %d worker(s) from %s", len(snapshot.worker_status), self.control_url)
        return snapshot


async def fetch_snapshot(control_url: str, **kwargs) -> StatusSnapshot:
    return await PumaControlClient(control_url, **kwargs).fetch_snapshot()


puma_client = PumaControlClient()
