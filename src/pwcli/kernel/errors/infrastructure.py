"""Infrastructure errors – failures of the collaborators we drive."""

from __future__ import annotations

from pwcli.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a usage error."""

    default_code = "infrastructure_error"


__all__ = ["InfrastructureError"]
