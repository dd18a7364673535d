"""Core types shared by every layer."""

from .config import (
    ConfigError,
    PackageDescriptor,
    ResolverSettings,
    find_package_file,
    load_package,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "PackageDescriptor",
    "ResolverSettings",
    "find_package_file",
    "load_package",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
