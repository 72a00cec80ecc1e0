"""Base Pydantic models for parser data structures.

This module defines the foundational model classes used by all parsed
entities and configuration objects. It enforces immutability and strict
schema validation so that one parse call can never alter an object
produced by another one.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all parsed entities.

    This class serves as the root for all Pydantic models representing
    actions, classification results, matcher tables and reports.

    Design principles enforced by this model:
        - Immutability: entities cannot be modified after creation.
          Parse results are built fresh per call and safe to share.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in extension tables.
        - Output contract naming: fields are serialized in camelCase
          (`expectedValue`, `useStoredVariable`) and accepted by either
          the Python or the camelCase name.

    All parser models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )

    def to_payload(self) -> dict:
        """Dump the model as a JSON-compatible output payload.

        Unset optional attributes are omitted so that consumers can tell
        an absent attribute from an explicit `null` value.

        Returns:
            A mapping with camelCase keys.
        """
        return self.model_dump(mode='json', exclude_none=True)


class SettingsModel(BaseSettings):
    """Base immutable model for parser settings.

    This class serves as the root for all settings models responsible for
    resolving runtime configuration (for example, environment variables
    or local overrides).

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
          This guarantees consistent thresholds during a parse call.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.

    All runtime settings models must inherit from this class.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
