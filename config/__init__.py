"""
Configuration Package

All tunables live in config.settings.
"""
