"""JSON Schema of the parser output contract."""

from functools import cache
from json import dumps

from pydantic.json_schema import GenerateJsonSchema

from nlsteps.schema import ParsedInstructionSet


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for parsed instruction sets.

    The schema describes serialized output: camelCase keys and the
    action union discriminated by `type`.
    """

    @classmethod
    @cache
    def make_schema(cls, indent: int | str | None = 4) -> str:
        """Generate the JSON Schema of `ParsedInstructionSet`.

        Args:
            indent: Indentation level used for JSON formatting.

        Returns:
            Serialized JSON Schema string.
        """
        schema = {
            **ParsedInstructionSet.model_json_schema(
                by_alias=True,
                mode='serialization',
                schema_generator=cls,
            ),
            'title': 'nlsteps',
            'description': 'JSON Schema of actions parsed from test instructions',
            '$schema': cls.schema_dialect,
        }

        return dumps(
            schema,
            ensure_ascii=False,
            sort_keys=True,
            indent=indent,
        )
