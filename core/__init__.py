"""
Core package - helpers shared across repositories and services.
"""
