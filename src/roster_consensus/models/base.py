"""Base Pydantic schemas for the project.

Provides common base classes for all Pydantic models in roster-consensus
with shared configuration and validation behavior.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema", "FrozenSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - from_attributes: Enable building models from ORM rows or plain objects
    - str_strip_whitespace: Automatically strip whitespace from strings
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
    )


class FrozenSchema(BaseSchema):
    """Immutable variant of BaseSchema for value objects.

    Shifts, proposals, evidence and decision contexts are shared across
    concurrently running evaluators and must never change after creation.
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        frozen=True,
    )
