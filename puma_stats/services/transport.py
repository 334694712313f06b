"""Adapters that fetch the raw ``stats`` payload from a Puma control channel.

Two ways in:

* ``HttpControlTransport`` talks to Puma's control app directly, over TCP or a
  Unix socket (``activate_control_app`` in the Puma config).
* ``PumactlTransport`` shells out to ``pumactl``, which prints a status line
  before the JSON document.

Both return the JSON text only; framing and timeouts stay in this module.
"""
import asyncio
import logging
from typing import NamedTuple

import httpx

from puma_stats.core.exceptions import ControlConnectionError, ParseError

logger = logging.getLogger(__name__)

# Host header only; the Unix socket decides where the request goes.
UDS_BASE_URL = "http://puma"


class ControlEndpoint(NamedTuple):
    base_url: str
    uds: str | None = None


def _checked_base_url(control_url: str, base_url: str) -> str:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ControlConnectionError(f"Invalid control URL {control_url}: {e}") from e
    if not url.host:
        raise ControlConnectionError(f"Missing host in control URL: {control_url}")
    return base_url


def parse_control_url(control_url: str) -> ControlEndpoint:
    if control_url.startswith("unix://"):
        path = control_url[len("unix://"):]
        if not path:
            raise ControlConnectionError(f"Missing socket path in control URL: {control_url}")
        return ControlEndpoint(UDS_BASE_URL, path)
    if control_url.startswith("tcp://"):
        base_url = "http://" + control_url[len("tcp://"):].rstrip("/")
        return ControlEndpoint(_checked_base_url(control_url, base_url))
    if control_url.startswith(("http://", "https://")):
        return ControlEndpoint(_checked_base_url(control_url, control_url.rstrip("/")))
    if "://" in control_url:
        raise ControlConnectionError(f"Unsupported control URL scheme: {control_url}")
    if not control_url:
        raise ControlConnectionError("Empty control URL")
    # bare path to the control socket
    return ControlEndpoint(UDS_BASE_URL, control_url)


def strip_preamble(output: str) -> str:
    """Drop any status lines printed ahead of the JSON document."""
    lines = output.splitlines()
    for pos, line in enumerate(lines):
        if line.lstrip().startswith("{"):
            return "\n".join(lines[pos:])
    raise ParseError("No JSON document in control channel output")


class HttpControlTransport:
    def __init__(self, control_url: str, token: str | None = None, timeout: float = 5.0):
        self.control_url = control_url
        self.endpoint = parse_control_url(control_url)
        self.token = token
        self.timeout = timeout

    async def fetch_stats(self) -> str:
        params = {"token": self.token} if self.token else None
        transport = httpx.AsyncHTTPTransport(uds=self.endpoint.uds) if self.endpoint.uds else None

        logger.debug("GET %s/stats (uds=%s)", self.endpoint.base_url, self.endpoint.uds)
        async with httpx.AsyncClient(
            base_url=self.endpoint.base_url, transport=transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.get("/stats", params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.warning("Control server at %s answered %s", self.control_url, e.response.status_code)
                raise ControlConnectionError(
                    f"Control server at {self.control_url} refused the stats query: "
                    f"HTTP {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                logger.warning("Control server at %s unreachable: %s", self.control_url, e)
                raise ControlConnectionError(
                    f"Cannot reach control server at {self.control_url}: {e}"
                ) from e

        return strip_preamble(response.text)


class PumactlTransport:
    def __init__(
        self,
        control_url: str,
        token: str | None = None,
        timeout: float = 5.0,
        pumactl_bin: str = "pumactl",
    ):
        self.control_url = control_url
        self.token = token
        self.timeout = timeout
        self.pumactl_bin = pumactl_bin

    def command(self) -> list[str]:
        control_url = self.control_url
        if "://" not in control_url:
            # pumactl only takes URLs; a bare path is the control socket
            control_url = f"unix://{control_url}"
        cmd = [self.pumactl_bin, "--control-url", control_url]
        if self.token:
            cmd.extend(["--control-token", self.token])
        cmd.append("stats")
        return cmd

    async def fetch_stats(self) -> str:
        cmd = self.command()
        logger.debug("Running %s", cmd[0])

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ControlConnectionError(f"Cannot run {self.pumactl_bin}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ControlConnectionError(
                f"{self.pumactl_bin} did not answer within {self.timeout}s"
            ) from e

        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip() or stdout.decode(errors="replace").strip()
            logger.warning("%s exited with %s", self.pumactl_bin, process.returncode)
            raise ControlConnectionError(
                f"{self.pumactl_bin} stats failed for {self.control_url} "
                f"(exit {process.returncode}): {detail}"
            )

        return strip_preamble(stdout.decode(errors="replace"))


def build_transport(
    kind: str,
    control_url: str,
    token: str | None = None,
    timeout: float = 5.0,
    pumactl_bin: str = "pumactl",
) -> HttpControlTransport | PumactlTransport:
    if kind == "http":
        return HttpControlTransport(control_url, token=token, timeout=timeout)
    if kind == "pumactl":
        return PumactlTransport(control_url, token=token, timeout=timeout, pumactl_bin=pumactl_bin)
    raise ValueError(f"Unknown transport: {kind}")
