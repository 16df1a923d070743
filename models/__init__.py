"""Data models and utility functions.

This package contains:
- types: Light, Scene, Group and CloudScene models
- items: Launcher menu items
- utils: Utility functions (fuzzy_matches, split_query, parse_level, etc.)
"""
