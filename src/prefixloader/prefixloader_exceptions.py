"""
This file contains the exceptions raised by prefixloader
"""

from typing import Optional


class PrefixLoaderException(Exception):
    """
    Base exception for all prefixloader errors
    """

    def __init__(self, message: str):
        super().__init__(message)


class LoadError(PrefixLoaderException):
    """
    Raised when a resolved file could not be executed by a Loadable.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TableFormatError(PrefixLoaderException):
    """
    Raised when a generated prefix table file cannot be read or fails validation.
    """


class ConfigurationError(PrefixLoaderException):
    """
    Raised when a PrefixLoaderConfig carries an unusable value.
    """
