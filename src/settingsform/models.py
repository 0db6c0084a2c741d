"""Peewee ORM model definitions"""

from datetime import datetime
from zoneinfo import ZoneInfo

from peewee import CharField, DatabaseProxy, DateTimeField, Model
from playhouse.shortcuts import ThreadSafeDatabaseMetadata
from playhouse.sqlite_ext import JSONField

UTC = ZoneInfo("UTC")

# Use DatabaseProxy for deferred database binding
database_proxy = DatabaseProxy()


class BaseModel(Model):
    """Base model class - supports thread-safe metadata"""

    class Meta:
        database = database_proxy
        model_metadata_class = ThreadSafeDatabaseMetadata


class Option(BaseModel):
    """One named option holding a JSON value, e.g. a group's stored value map"""

    name = CharField(unique=True)
    value = JSONField(null=True)
    updated_at = DateTimeField(default=lambda: datetime.now(UTC))

    class Meta:
        table_name = "options"

    def save(self, *args, **kwargs):
        """Override save method to auto-update updated_at"""
        if self._pk is not None:
            self.updated_at = datetime.now(UTC)
        return super().save(*args, **kwargs)
