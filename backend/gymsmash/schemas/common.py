"""Shared schema bases."""
from typing import Any, ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """
    Base for update bodies applied with ``exclude_unset``.

    Omitted fields are left alone. Fields named in ``not_nullable`` map to
    NOT NULL columns, so they may be omitted but never sent as null.
    """
    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = [name for name in cls.not_nullable if name in data and data[name] is None]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data
