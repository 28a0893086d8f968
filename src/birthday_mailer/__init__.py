"""
Birthday reminder mailer.

A Flask API that looks up a user's email address in the identity store
and sends an HTML birthday reminder through MailChannels.
"""

__version__ = "1.0.0"
__author__ = "Birthdays.run"
