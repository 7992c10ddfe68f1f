"""PostgreSQL repository implementations."""

from hello.persistence.repository.identity import PostgresIdentityRepository

__all__ = [
    "PostgresIdentityRepository",
]
