from abc import ABC, abstractmethod

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.user_repository import IUserRepository


class StoreError(Exception):
    """Persistence failure raised by store adapters (connection, constraint, timeout)"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    password_reset_tokens: IPasswordResetTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
