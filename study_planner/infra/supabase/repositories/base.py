"""Base repository with common CRUD operations"""
import asyncio
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from supabase import Client  # type: ignore

from study_planner import config
from study_planner.infra.supabase.errors import StoreError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.

    Every query goes through ``_execute``, which retries failed calls a fixed
    number of times before raising ``StoreError``.
    """

    # Columns selected for reads; subclasses widen this with embedded relations
    select_columns = "*"

    def __init__(
        self,
        client: Client,
        table_name: str,
        model_class: Type[T],
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class
        self._max_retries = config.STORE_MAX_RETRIES if max_retries is None else max_retries
        self._retry_delay = config.STORE_RETRY_DELAY if retry_delay is None else retry_delay

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class(**data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    def _table(self):
        return self._client.table(self._table_name)

    async def _execute(self, operation: str, build_query: Callable[[], Any]):
        """Run a query, retrying on failure.

        Args:
            operation: Human readable description used in logs and errors
            build_query: Callable returning a fresh query builder to execute

        Returns:
            The PostgREST response

        Raises:
            StoreError: When every attempt failed
        """
        attempt = 0
        while True:
            try:
                return build_query().execute()
            except Exception as e:
                if attempt >= self._max_retries:
                    logger.error(f"Error trying to {operation} after {attempt + 1} attempts: {e}")
                    raise StoreError(operation, e) from e
                attempt += 1
                logger.warning(f"Failed to {operation} ({e}), retry {attempt}/{self._max_retries}")
                await asyncio.sleep(self._retry_delay)

    async def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID"""
        response = await self._execute(
            f"fetch {self._table_name} record",
            lambda: self._table().select(self.select_columns).eq("id", id),
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_all(self, limit: Optional[int] = None, order_by: Optional[str] = None, desc: bool = False) -> List[T]:
        """Find all records with optional ordering and limit"""
        def build():
            query = self._table().select(self.select_columns)
            if order_by:
                query = query.order(order_by, desc=desc)
            if limit:
                query = query.limit(limit)
            return query

        response = await self._execute(f"fetch {self._table_name}", build)
        return self._to_models(response.data or [])

    async def find_by_filters(self, filters: Dict[str, Any], limit: Optional[int] = None) -> List[T]:
        """Find records matching filters"""
        def build():
            query = self._table().select(self.select_columns)
            for key, value in filters.items():
                query = query.eq(key, value)
            if limit:
                query = query.limit(limit)
            return query

        response = await self._execute(f"fetch {self._table_name}", build)
        return self._to_models(response.data or [])

    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        operation = f"create {self._table_name} record"
        response = await self._execute(
            operation,
            lambda: self._table().insert(data_dict),
        )

        if not response.data:
            raise StoreError(operation)

        created = response.data[0]
        if self.select_columns != "*":
            # Inserts only return plain columns; re-read to embed relations
            return await self.find_by_id(created["id"]) or self._to_model(created)
        return self._to_model(created)

    async def update(self, id: str, data: UpdateT) -> Optional[T]:
        """Update a record by ID"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')

        if not data_dict:
            # No fields to update
            return await self.find_by_id(id)

        response = await self._execute(
            f"update {self._table_name} record",
            lambda: self._table().update(data_dict).eq("id", id),
        )

        if not response.data:
            return None

        if self.select_columns != "*":
            return await self.find_by_id(id)
        return self._to_model(response.data[0])

    async def delete(self, id: str) -> bool:
        """Delete a record by ID"""
        response = await self._execute(
            f"delete {self._table_name} record",
            lambda: self._table().delete().eq("id", id),
        )
        return bool(response.data)
