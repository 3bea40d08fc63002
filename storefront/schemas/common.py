from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal everywhere in Python, a plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

Price = Annotated[Money, Field(ge=0, max_digits=10, decimal_places=2)]


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON keys (both accepted on input)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
