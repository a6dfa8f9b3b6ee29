"""
Core module - settings, password/token primitives and authentication.
"""
