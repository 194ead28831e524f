"""
Base repository with generic CRUD operations.
"""
import uuid
from contextlib import asynccontextmanager
from typing import TypeVar, Generic, Type, Optional, List

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from activity_pipeline.core.dates import utcnow
from activity_pipeline.core.exceptions import StoreUnavailableError

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with CRUD operations.
    Inherit and specify the model class.
    Database errors roll the session back and surface as StoreUnavailableError.
    """
    
    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session
    
    @asynccontextmanager
    async def _store_errors(self, operation: str):
        """Translate SQLAlchemy failures into StoreUnavailableError."""
        try:
            yield
        except SQLAlchemyError as e:
            # Leave the session usable for the next read
            await self.session.rollback()
            raise StoreUnavailableError(
                self.model.__tablename__, f"{operation} failed: {e}"
            ) from e
    
    async def create(self, obj_in: dict) -> ModelType:
        """Create a new record."""
        async with self._store_errors("create"):
            db_obj = self.model(**obj_in)
            self.session.add(db_obj)
            await self.session.commit()
            await self.session.refresh(db_obj)
            return db_obj
    
    async def get(self, id: uuid.UUID) -> Optional[ModelType]:
        """Get a record by ID."""
        async with self._store_errors("get"):
            return await self.session.get(self.model, id)
    
    async def list(
        self,
        order_by: str = "created_at",
        order_desc: bool = False
    ) -> List[ModelType]:
        """List all records."""
        query = select(self.model)
        
        # Apply ordering
        if hasattr(self.model, order_by):
            order_column = getattr(self.model, order_by)
            query = query.order_by(order_column.desc() if order_desc else order_column)
        
        async with self._store_errors("list"):
            result = await self.session.exec(query)
            return list(result.all())
    
    async def update(self, id: uuid.UUID, obj_in: dict) -> Optional[ModelType]:
        """Update a record with the given fields; None clears a field."""
        db_obj = await self.get(id)
        if not db_obj:
            return None
        
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        
        # Update timestamp if exists
        if hasattr(db_obj, 'updated_at'):
            db_obj.updated_at = utcnow()
        
        async with self._store_errors("update"):
            self.session.add(db_obj)
            await self.session.commit()
            await self.session.refresh(db_obj)
            return db_obj
    
    async def exists(self, id: uuid.UUID) -> bool:
        """Check if a record exists."""
        obj = await self.get(id)
        return obj is not None
    
    async def delete(self, id: uuid.UUID) -> bool:
        """Delete a record."""
        db_obj = await self.get(id)
        if not db_obj:
            return False
        
        async with self._store_errors("delete"):
            await self.session.delete(db_obj)
            await self.session.commit()
            return True
