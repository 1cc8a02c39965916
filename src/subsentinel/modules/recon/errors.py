"""Exception types raised by the reconnaissance pipeline."""


class ReconError(Exception):
    """Base class for reconnaissance errors."""


class DomainValidationError(ReconError):
    """The target domain is malformed or points at internal infrastructure."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UpstreamError(ReconError):
    """A single upstream source (CT log, DNS, probe, archive) failed."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class PersistenceError(ReconError):
    """A write to the scan store failed."""
