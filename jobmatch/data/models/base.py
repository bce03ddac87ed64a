"""
Base model classes for jobmatch data models.

Provides common fields and functionality shared across all models.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form pymongo returns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PyObjectId(ObjectId):
    """Custom ObjectId type for Pydantic v2 compatibility with MongoDB."""

    @classmethod
    def __get_pydantic_core_schema__(cls, _source_type: Any, _handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(ObjectId),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(cls.validate),
                    ]
                ),
            ],
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        """Validate and convert string to ObjectId."""
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError(f"Invalid ObjectId: {value}")


class BaseDocument(BaseModel):
    """
    Base document model for MongoDB collections.

    The engine only reads these documents; the owning subsystems
    maintain their timestamps and lifecycle.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        extra="ignore",
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    @property
    def id_str(self) -> str:
        """String form of the document id, empty when unsaved."""
        return str(self.id) if self.id is not None else ""


class EmbeddedModel(BaseModel):
    """
    Base model for embedded documents and plain result records.

    Use this for models that are embedded within other documents
    or returned to callers rather than stored in their own collection.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )
