"""Instruction parsing core.

This module defines the deterministic, rule-based engine turning
natural-language test instructions into typed actions.

It provides:
- text normalization and confidence scoring against matcher tables;
- cascading field and value extraction;
- line orchestration with cross-line context;
- the Expected Output grammar;
- security intent classification;
- caller-level request validation and profiling.

The primary public entry point is `InstructionParser`.
"""

from .expected import ExpectedOutputParser
from .normalizer import normalize
from .parser import InstructionParser
from .requests import profile_request, validate_request
from .scoring import ConfidenceScorer
from .security import SecurityIntentClassifier

__all__ = (
    'ConfidenceScorer',
    'ExpectedOutputParser',
    'InstructionParser',
    'SecurityIntentClassifier',
    'normalize',
    'profile_request',
    'validate_request',
)
