"""
Purinto I/O Module

Reading and writing settings files.
"""

from .settings_io import load_settings, save_settings, settings_to_dict, dict_to_settings

__all__ = ['load_settings', 'save_settings', 'settings_to_dict', 'dict_to_settings']
