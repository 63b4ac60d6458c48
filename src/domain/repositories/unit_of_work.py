"""Transaction boundary shared by the complaint and profile repositories."""

from types import TracebackType
from typing import Optional, Protocol

from domain.repositories.complaint_repository import IComplaintRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """One transaction spanning complaints and profiles.

    Nothing is persisted unless ``commit`` is awaited before the context
    exits; leaving with an exception rolls back.
    """

    complaints: IComplaintRepository
    profiles: IProfileRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
