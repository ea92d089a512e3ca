from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer


def _money_to_json(value) -> float:
    # Rounded to cents; as a JSON number 4500.00 is written 4500.0
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


_money_serializer = PlainSerializer(_money_to_json, return_type=float, when_used="json")

# Money is kept as Decimal internally and written to JSON as a number
Money = Annotated[Decimal, _money_serializer]

Price = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2), _money_serializer]

ShortText = Annotated[str, Field(min_length=1, max_length=50)]

TimeOfDay = Annotated[str, Field(min_length=1, max_length=10)]

Notes = Annotated[str, Field(max_length=500)]

Phone = Annotated[str, Field(max_length=20)]

Address = Annotated[str, Field(max_length=255)]

# bcrypt only reads the first 72 bytes
Password = Annotated[str, Field(max_length=72)]


def to_naive(value: datetime) -> datetime:
    """Store timestamps as naive values; aware input is converted to UTC first."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
