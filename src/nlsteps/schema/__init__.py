"""Parser data model.

Defines the action tagged union, compiled matcher tables and the
results produced by the instruction parser and the security intent
classifier.
"""

from .actions import (
    ACTION_MODELS,
    Action,
    AttachBody,
    BaseAction,
    Count,
    MeasureTime,
    ReadField,
    SendChainedRequest,
    SendRequest,
    StoreResponse,
    Verify,
)
from .matchers import ClassificationCandidate, MatcherHits, MatcherSpec, MatcherTable
from .results import (
    ClassificationResult,
    ConfidenceSummary,
    ParsedInstructionSet,
    RequestProfile,
    SecurityConstraints,
    SecurityContextReport,
    SecurityIntent,
    SecurityProfile,
)

__all__ = (
    'ACTION_MODELS',
    'Action',
    'AttachBody',
    'BaseAction',
    'ClassificationCandidate',
    'ClassificationResult',
    'ConfidenceSummary',
    'Count',
    'MatcherHits',
    'MatcherSpec',
    'MatcherTable',
    'MeasureTime',
    'ParsedInstructionSet',
    'ReadField',
    'RequestProfile',
    'SecurityConstraints',
    'SecurityContextReport',
    'SecurityIntent',
    'SecurityProfile',
    'SendChainedRequest',
    'SendRequest',
    'StoreResponse',
    'Verify',
)
