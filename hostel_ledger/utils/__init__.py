"""
Utility helpers for dates and display formatting.
"""
