"""Errors raised by the hashing core."""

from __future__ import annotations


class PerceptiveError(Exception):
    """Base class for all perceptive errors."""


class NilImageError(PerceptiveError):
    def __init__(self, message: str = "perceptive: nil image") -> None:
        super().__init__(message)


class InvalidHashError(PerceptiveError):
    def __init__(self, message: str = "perceptive: invalid perceptual hash") -> None:
        super().__init__(message)
