# Path: fin_extract/core/__init__.py
"""
fin_extract Core Package

Core utilities for the extraction system.

Submodules:
    - logger: IPO-aware logging system
"""
