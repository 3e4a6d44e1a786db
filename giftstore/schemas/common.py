"""
Shared response envelope and field types
"""
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, PlainSerializer


# Money is kept as Decimal in Python and rendered as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Envelope(BaseModel):
    """Every response carries success and an optional message"""
    success: bool = True
    message: Optional[str] = None
