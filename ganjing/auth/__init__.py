"""
Authentication Package

Access and upload token management for GanJing World.
"""

from ganjing.auth.token_manager import TokenManager, UploadToken

__all__ = [
    "TokenManager",
    "UploadToken",
]
