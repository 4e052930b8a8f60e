"""Exceptions raised by the watermarking engine."""

import os
from typing import Union


class WatermarkError(Exception):
    """Base class for all watermarking errors."""


class InvalidConfig(WatermarkError):
    """A configuration value is out of its allowed range."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"invalid {field}: {reason}")


class LoadFailure(WatermarkError):
    """An image source could not be decoded."""

    def __init__(self, path: Union[str, "os.PathLike[str]"], cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"failed to load image {self.path}: {cause}")
