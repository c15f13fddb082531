"""
User Repository

Parameterized statements against the single user table. Every call checks
a connection out of the engine's pool for the duration of one transaction
and returns it on exit, including when the statement raises.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine


class UserRepository:
    """Repository for user data access."""

    def __init__(self, engine: AsyncEngine, table: Table):
        self._engine = engine
        self._table = table

    @property
    def public_columns(self):
        t = self._table.c
        return [t.id, t.name, t.email, t.phone, t.role]

    async def exists_by_email(self, email: str) -> int:
        query = select(func.count()).select_from(self._table).where(self._table.c.email == email)
        async with self._engine.begin() as connection:
            return await connection.scalar(query)

    async def insert(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        password: Optional[str],
        role: str,
    ) -> int:
        """Insert a user and return the store-assigned id."""
        statement = insert(self._table).values(
            name=name,
            email=email,
            phone=phone,
            password=password,
            role=role,
        )
        async with self._engine.begin() as connection:
            result = await connection.execute(statement)
            return result.inserted_primary_key[0]

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get the first user with this email, password hash included."""
        query = select(self._table).where(self._table.c.email == email).limit(1)
        async with self._engine.begin() as connection:
            row = (await connection.execute(query)).mappings().first()
        if row is None:
            return None
        return dict(row)

    async def list_all(self) -> List[Dict[str, Any]]:
        query = select(*self.public_columns).order_by(self._table.c.id)
        async with self._engine.begin() as connection:
            rows = (await connection.execute(query)).mappings().all()
        return [dict(row) for row in rows]

    async def update_by_id(self, user_id: int, name: str, email: str, phone: str, role: str) -> int:
        # Password is deliberately not part of this statement.
        statement = (
            update(self._table)
            .where(self._table.c.id == user_id)
            .values(name=name, email=email, phone=phone, role=role)
        )
        async with self._engine.begin() as connection:
            result = await connection.execute(statement)
            return result.rowcount

    async def delete_by_id(self, user_id: int) -> None:
        statement = delete(self._table).where(self._table.c.id == user_id)
        async with self._engine.begin() as connection:
            await connection.execute(statement)
