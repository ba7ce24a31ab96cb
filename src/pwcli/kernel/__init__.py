"""Kernel – framework-agnostic building blocks shared by every layer."""

from pwcli.kernel.errors import (
    ApplicationError,
    BaseError,
    InfrastructureError,
    TimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "TimeoutError",
]
