from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field

from hesab.domain.amounts import parse_grouped


def _coerce_amount(value: object) -> object:
    # form fields send grouped strings ("1,500,000"); garbage becomes 0
    if isinstance(value, str):
        return parse_grouped(value)
    return value


AmountIn = Annotated[int, BeforeValidator(_coerce_amount), Field(ge=0, examples=[1500000, "1,500,000"])]
