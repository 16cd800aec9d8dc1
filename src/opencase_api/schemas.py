"""Shared pydantic building blocks for request/response bodies."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = ["ApiModel", "DataResponse"]

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base model serialised with camelCase keys on the wire.

    Fields are accepted under either their Python name or the camelCase alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Success envelope: ``{"data": ...}``."""

    data: T
