"""
Shared building blocks: settings, styles, formatting and the section registry.
"""
