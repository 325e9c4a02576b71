"""
Client-side exception types.

RemoteUnavailableError never escapes the data-access facade: it is the signal
to switch to the local store. LocalStoreError does escape, because a broken
local store is a bug rather than a connectivity condition.
"""


class RemoteUnavailableError(Exception):
    """The remote path failed: transport error, timeout or non-2xx response.

    Args:
        operation:   Facade operation name (e.g. "get_dashboard").
        status_code: HTTP status when a response arrived, else None.
        detail:      Gateway error text.
    """

    def __init__(self, operation: str, status_code: int | None = None, detail: str | None = None) -> None:
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        msg = f"Remote call {operation} failed"
        if status_code is not None:
            msg += f" (HTTP {status_code})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class LocalStoreError(Exception):
    """The persisted local store holds data that cannot be parsed."""

    def __init__(self, key: str, detail: str) -> None:
        self.key = key
        super().__init__(f"Local store key {key!r} is unreadable: {detail}")
