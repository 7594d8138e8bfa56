"""
Application services that drive post lifecycle changes.
"""
