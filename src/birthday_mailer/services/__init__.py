"""
Services Layer.

Business logic orchestration:
- Birthday reminder lookup, composition and dispatch
"""

from birthday_mailer.services.reminder import ReminderService


__all__ = [
    "ReminderService",
]
