"""Request and response bodies of the sample endpoint."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RequestData:
    name: str
    message: str


@dataclass(frozen=True, slots=True)
class ResponseData:
    message: str
