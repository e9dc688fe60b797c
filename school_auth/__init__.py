"""
School Auth Functions

Serverless handlers for teacher signup, username login and admin bulk
signup against Supabase.
"""

__version__ = "1.0.0"
