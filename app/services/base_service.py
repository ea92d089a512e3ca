from typing import Type, TypeVar, Optional
from pydantic import BaseModel
from sqlalchemy.orm import Session

from services.exceptions import NotFoundError

ModelType = TypeVar("ModelType")


class BaseService:
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def create(self, db: Session, obj_in) -> ModelType:
        """
        Create a new record in the database

        Args:
            db: Database session
            obj_in: Either a SQLAlchemy model or a Pydantic schema

        Returns:
            The created model instance
        """
        if isinstance(obj_in, BaseModel):
            db_obj = self.model(**obj_in.model_dump())
        else:
            db_obj = obj_in

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_or_raise(self, db: Session, id: int) -> ModelType:
        db_obj = self.get(db, id)
        if db_obj is None:
            raise NotFoundError(f"{self.model.__name__} with id {id} not found")
        return db_obj

    def update(self, db: Session, db_obj: ModelType, obj_in: BaseModel) -> ModelType:
        # Fields sent as null are left untouched
        for key, value in obj_in.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(db_obj, key, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj
