"""
squares.interfaces - User interfaces for Squares

Console command processor and REST adapter. Nothing is imported here so the
FastAPI stack is only loaded when the API is used.
"""

__all__ = []
