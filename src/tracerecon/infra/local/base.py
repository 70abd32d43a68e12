"""Abstract base for sources of the local reproduction's transaction."""

from abc import ABC, abstractmethod

from tracerecon.domain.models.repro import LocalReproResult


class LocalReproSource(ABC):
    """Strategy interface for obtaining the reproduction receipt and its deployed addresses."""

    @abstractmethod
    async def run(self) -> LocalReproResult:
        """Return the mined reproduction transaction. Blocks until it is available."""
