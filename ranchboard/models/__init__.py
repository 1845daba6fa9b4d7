"""Database model exports."""

from .action import ActionRecord, ActionWebhook

__all__ = [
    "ActionRecord",
    "ActionWebhook",
]
