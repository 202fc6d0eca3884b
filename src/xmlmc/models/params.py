"""
Parameter and response models.
"""

from pydantic import BaseModel


class ParamAttribute(BaseModel):
    """An attribute written onto a parameter's opening tag. The value is not escaped."""

    name: str
    value: str


class XmlmcResponse(BaseModel):
    body: str
    headers: dict[str, list[str]]
    status_code: int
