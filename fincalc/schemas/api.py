"""Response shapes for the non-calculator endpoints."""

from typing import List

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str


class CalculatorInfo(BaseModel):
    key: str
    title: str
    fields: List[str]
