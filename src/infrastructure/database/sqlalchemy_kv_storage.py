"""SQLAlchemy implementation of the key-value storage."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.exceptions import StorageUnavailableError
from infrastructure.database.models import KeyValueModel


class SQLAlchemyKeyValueStorage:
    """SQLAlchemy implementation of IKeyValueStorage.

    Each call opens its own session and commits before returning.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        """Get the blob stored under a key."""
        try:
            with self._session_factory() as session:
                stmt = select(KeyValueModel.value).where(KeyValueModel.key == key)
                return session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(key, str(e)) from e

    def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite the blob stored under a key."""
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueModel, key)
                if model is None:
                    session.add(KeyValueModel(key=key, value=value))
                else:
                    model.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(key, str(e)) from e

    def remove_item(self, key: str) -> None:
        """Delete the slot for a key, if any."""
        try:
            with self._session_factory() as session:
                session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(key, str(e)) from e
