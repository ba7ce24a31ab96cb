"""Commands – shared command-layer helpers."""
from pwcli.commands.base import BrowserService, RetryingCommand

__all__ = ["BrowserService", "RetryingCommand"]
