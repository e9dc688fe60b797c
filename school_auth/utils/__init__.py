"""
Utility modules for the auth functions
"""
