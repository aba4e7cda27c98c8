"""Error taxonomy shared by every stage of the reindex run."""


class StakeSyncError(Exception):
    """Base class for all stakesync failures."""


class TransportError(StakeSyncError):
    """Network failure or non-success HTTP status from a collaborator."""


class UpstreamError(StakeSyncError):
    """The remote answered but reported an error in its envelope."""

    def __init__(self, message: str, code: str = "") -> None:
        super().__init__(message)
        self.code = code


class DecodeError(StakeSyncError):
    """Malformed JSON, base64 or VM return data."""


class InvalidBalanceFormat(StakeSyncError, ValueError):
    """A balance string is empty or not a base-10 non-negative integer."""


class StoreReadError(StakeSyncError):
    """The store reported a per-document failure in a multi-get answer."""


class StoreWriteError(StakeSyncError):
    """One or more bulk items were rejected by the store."""

    def __init__(self, failed: int, total: int, sample: list[str] | None = None) -> None:
        self.failed = failed
        self.total = total
        self.sample = sample or []
        detail = f": {'; '.join(self.sample)}" if self.sample else ""
        super().__init__(f"{failed} of {total} bulk items failed{detail}")


class CloneProtocolError(StakeSyncError):
    """The read-only / clone / unset-read-only sequence failed."""

    def __init__(self, clone_error: BaseException, cleanup_error: BaseException | None = None) -> None:
        self.clone_error = clone_error
        self.cleanup_error = cleanup_error
        message = f"error clone: {clone_error}"
        if cleanup_error is not None:
            message += f", error unsetReadOnly: {cleanup_error}"
        super().__init__(message)


class PipelineError(StakeSyncError):
    """A pipeline phase failed; the new index generation must not be promoted."""

    def __init__(self, phase: str, cause: BaseException, report: object | None = None) -> None:
        self.phase = phase
        self.report = report  # partial RunReport, when available
        super().__init__(f"phase '{phase}' failed: {cause}")
