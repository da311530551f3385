from contextlib import contextmanager
from typing import Callable, Type, TypeVar
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from .errors import NotFoundError, PersistenceError

M = TypeVar("M", bound=SQLModel)
T = TypeVar("T")

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors():
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc)) from exc


class Gateway:
    """CRUD and query operations over one SQLModel session.

    Only the entity passed in is written; related rows are referenced by
    foreign-key id and never re-serialised.
    """

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, model: Type[M], entity_id) -> M | None:
        with _storage_errors():
            return self.session.get(model, entity_id)

    def get(self, model: Type[M], entity_id) -> M:
        entity = self.find_by_id(model, entity_id)
        if entity is None:
            raise NotFoundError(model.__name__, entity_id)
        return entity

    def query(self, model: Type[M], *criteria, order_by=None) -> list[M]:
        statement = select(model)
        if criteria:
            statement = statement.where(*criteria)
        if order_by is not None:
            statement = statement.order_by(order_by)
        with _storage_errors():
            return list(self.session.exec(statement).all())

    def first(self, model: Type[M], *criteria) -> M | None:
        statement = select(model).where(*criteria)
        with _storage_errors():
            return self.session.exec(statement).first()

    def insert(self, entity: M) -> M:
        with _storage_errors():
            self.session.add(entity)
            self.session.flush()
        return entity

    def update(self, entity: M) -> None:
        with _storage_errors():
            self.session.add(entity)
            self.session.flush()

    def delete(self, model: Type[M], entity_id) -> None:
        entity = self.get(model, entity_id)
        with _storage_errors():
            self.session.delete(entity)
            self.session.flush()

    def transaction(self, fn: Callable[["Gateway"], T]) -> T:
        """Run ``fn`` atomically: commit on success, roll back on any error."""
        try:
            result = fn(self)
            with _storage_errors():
                self.session.commit()
        except Exception:
            self.session.rollback()
            logger.debug("Transaction rolled back")
            raise
        return result
