import logging
from datetime import datetime
from typing import Any

from peewee import PeeweeException

from ..errors import StorageException

logger = logging.getLogger(__name__)


class DBOptionStore:
    """Option store backed by the ``options`` table."""

    def get(self, name: str, default: Any = None) -> Any:
        from settingsform.models import Option

        try:
            option = Option.get_or_none(Option.name == name)
        except PeeweeException as e:
            raise StorageException(f"Failed to read option {name}: {e}") from e

        if option is None:
            return default
        return option.value

    def set(self, name: str, value: Any) -> None:
        from settingsform.models import UTC, Option

        try:
            updated = (
                Option.update(value=value, updated_at=datetime.now(UTC))
                .where(Option.name == name)
                .execute()
            )
            if not updated:
                Option.create(name=name, value=value)
        except PeeweeException as e:
            raise StorageException(f"Failed to write option {name}: {e}") from e

        logger.debug(f"Option saved: {name}")

    def delete(self, name: str) -> bool:
        from settingsform.models import Option

        try:
            deleted = Option.delete().where(Option.name == name).execute()
        except PeeweeException as e:
            raise StorageException(f"Failed to delete option {name}: {e}") from e

        return bool(deleted)
