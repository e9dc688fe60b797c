"""
HTTP routes for the auth functions
"""

from . import health, signup, login, bulk_signup, teachers

__all__ = ["health", "signup", "login", "bulk_signup", "teachers"]
