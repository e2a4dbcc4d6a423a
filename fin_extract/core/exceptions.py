# Path: fin_extract/core/exceptions.py
"""
Library exceptions for fin_extract.

Nothing here is meant to reach the caller of the orchestrator: these
are raised by individual components and handled at the orchestration
boundary, where they become warnings on the output record.
"""


class FinExtractError(Exception):
    """Base class for fin_extract errors."""
    pass


class AIResponseError(FinExtractError):
    """AI extraction payload is missing required structure."""
    pass


__all__ = ['FinExtractError', 'AIResponseError']
