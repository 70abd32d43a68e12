"""Exception hierarchy for trace reconciliation."""


class ReconciliationError(Exception):
    """Base class for all tracerecon errors."""


class ExternalServiceError(ReconciliationError):
    """Retriable failure talking to an upstream service (trace API, JSON-RPC node)."""


class TraceFetchError(ReconciliationError):
    """The trace source could not produce a trace: unreachable, timed out, or rejected credentials."""


class DecodeError(ReconciliationError):
    """A single log could not be decoded. Callers skip the log and continue."""


class ConfigurationError(ReconciliationError):
    """A required configuration value or input file is missing or invalid."""
