from pydantic import BaseModel
from typing import Any


class StandardResponse(BaseModel):
    success: bool
    message: str


class ListResponse(BaseModel):
    success: bool = True
    data: list[Any]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str
    timestamp: str
