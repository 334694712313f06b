class StatsError(Exception):
    """Base class for failures while fetching a status snapshot."""

    kind = "StatsError"


class ControlConnectionError(StatsError, ConnectionError):
    """The control channel is unreachable or refused the status query."""

    kind = "ConnectionError"


class ParseError(StatsError, ValueError):
    """The control channel answered, but not with a usable status snapshot."""

    kind = "ParseError"
