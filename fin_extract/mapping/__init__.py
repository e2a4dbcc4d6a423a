# Path: fin_extract/mapping/__init__.py
"""
Concept Mapping

Turns taxonomy concepts (us-gaap:, ifrs-full:) into canonical fields
via an ordered alias table.
"""

from .concept_aliases import CONCEPT_ALIASES, aliases_for, field_for_concept
from .concept_mapper import (
    ConceptMapper,
    MappingResult,
    coverage_confidence,
    concept_value,
    unique_concepts,
)

__all__ = [
    'CONCEPT_ALIASES',
    'aliases_for',
    'field_for_concept',
    'ConceptMapper',
    'MappingResult',
    'coverage_confidence',
    'concept_value',
    'unique_concepts',
]
