"""
Configuration package for the hostel upkeep backend.
"""

from hostelcare.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
