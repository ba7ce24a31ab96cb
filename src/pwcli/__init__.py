"""
pwcli – resilience core for the browser-automation command line.

Import path convention::

    from pwcli.resilience.retry import RetryExecutor, OperationCategory
    from pwcli.resilience.circuit_breaker import CircuitBreakerState
    from pwcli.commands.base import RetryingCommand
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
