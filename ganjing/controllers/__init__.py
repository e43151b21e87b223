"""
Controllers Package

High-level upload coordinators.
"""

from ganjing.controllers.upload_controller import UploadAssets, UploadController

__all__ = [
    "UploadAssets",
    "UploadController",
]
