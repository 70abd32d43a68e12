"""Arbitrary-precision amount types.

On-chain amounts routinely exceed 2**53, so they never travel as JSON numbers:
serialized as decimal strings, parsed back from decimal or 0x-prefixed hex.
"""

from typing import Annotated

from pydantic import BeforeValidator, Field, PlainSerializer


def parse_amount(value: object) -> object:
    if isinstance(value, bool):
        raise ValueError("boolean is not an amount")
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    return value


Amount = Annotated[
    int,
    BeforeValidator(parse_amount),
    PlainSerializer(str, return_type=str, when_used="json"),
    Field(ge=0),
]
