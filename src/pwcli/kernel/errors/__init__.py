"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   ├── TimeoutError
    │   │   └── OperationTimeoutError   (resilience.timeouts)
    │   ├── RetryExhaustedError         (resilience.retry)
    │   └── ConfigError                 (config.validation)
    └── InfrastructureError  (infrastructure.py)
        └── CircuitOpenError            (resilience.circuit_breaker)
"""

from pwcli.kernel.errors.application import ApplicationError, TimeoutError
from pwcli.kernel.errors.base import BaseError, error_message
from pwcli.kernel.errors.infrastructure import InfrastructureError

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "TimeoutError",
    "error_message",
]
