"""Like use cases."""

from .react import ReactAction, ReactRequest, ReactResponse, ReactUseCase

__all__ = [
    "ReactAction",
    "ReactRequest",
    "ReactResponse",
    "ReactUseCase",
]
