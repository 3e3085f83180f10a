"""Base class for value objects."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel
from pydantic import ValidationError as PydanticValidationError

from courseloop.domain.error import ValidationError


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Base class for value objects that wrap a single primitive value.

    Constructing one directly raises pydantic's ``ValidationError``;
    ``parse`` raises the domain ``ValidationError`` instead and is what
    services use on caller input.
    """

    model_config = ConfigDict(
        frozen=True,
    )

    @classmethod
    def parse(cls, value: Any, field: str):
        """Validate caller input, raising a domain ValidationError on failure."""
        try:
            return cls(value)
        except PydanticValidationError as e:
            message = e.errors()[0]["msg"].removeprefix("Value error, ")
            raise ValidationError(field, message) from None

    def __str__(self) -> str:
        """Return string representation of the root value."""
        return str(self.root)
