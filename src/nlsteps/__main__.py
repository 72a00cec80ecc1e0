"""Command-line utilities for nlsteps.

Parses instructions from files or standard input and prints the parsed
actions, the security classification or the JSON Schema of the output.
"""

import logging
from json import dumps
from typing import TYPE_CHECKING

from click import Choice, File, argument, echo, group, option, pass_context
from yaml import safe_dump

from nlsteps.core import InstructionParser, SecurityIntentClassifier, validate_request
from nlsteps.errors import InstructionRequestError
from nlsteps.jsonschema import SchemaGenerator
from nlsteps.names import BUILTIN_DOMAINS, HTTP_METHODS

if TYPE_CHECKING:
    from io import TextIOBase

    from click import Context

#: Exit code of rejected parse requests.
EXIT_INVALID_REQUEST = 2

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'

FORMATS = ('json', 'yaml')


def _render(payload: dict, output_format: str) -> str:
    """Serialize a payload for standard output."""
    if output_format == 'yaml':
        return safe_dump(payload, sort_keys=False, allow_unicode=True).rstrip()

    return dumps(payload, ensure_ascii=False, indent=2)


@group(help='Command-line utilities for natural-language test instructions.')
@option('-v', '--verbose', is_flag=True, default=False, help='Log parser decisions.')
def cli(verbose: bool) -> None:
    """Root CLI group for nlsteps tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@cli.command(
    name='parse',
    help='Parse an instruction from SOURCE (standard input by default) into actions.',
)
@argument('source', type=File('rt', encoding='utf-8'), default='-')
@option('-u', '--url', required=True, help='Target URL of the instruction.')
@option(
    '-m', '--method',
    type=Choice(HTTP_METHODS, case_sensitive=False),
    default=None,
    help='HTTP method hint.',
)
@option(
    '-d', '--domain',
    default='api',
    show_default=True,
    help=f'Instruction domain ({', '.join(BUILTIN_DOMAINS)} or a plugin domain).',
)
@option('-f', '--format', 'output_format', type=Choice(FORMATS), default='json', show_default=True)
@option('--strict', is_flag=True, default=False, help='Fail on plugin loading issues.')
@pass_context
def parse_instruction(ctx: 'Context', source: 'TextIOBase', url: str,
                      method: str | None, domain: str,
                      output_format: str, strict: bool) -> None:
    """Parse an instruction and print the parsed instruction set."""
    instruction = source.read()

    try:
        validate_request(instruction, url)
    except InstructionRequestError as error:
        echo(f'Error: {error}', err=True)
        ctx.exit(EXIT_INVALID_REQUEST)

    parser = InstructionParser(strict=strict)
    result = parser.parse(instruction, url, method, domain=domain)

    echo(_render(result.to_payload(), output_format))


@cli.command(
    name='classify',
    help='Classify the security intent of an instruction from SOURCE.',
)
@argument('source', type=File('rt', encoding='utf-8'), default='-')
@option('-f', '--format', 'output_format', type=Choice(FORMATS), default='json', show_default=True)
def classify_instruction(source: 'TextIOBase', output_format: str) -> None:
    """Print the security classification and the context report."""
    instruction = source.read()
    classifier = SecurityIntentClassifier()

    echo(_render({
        'classification': classifier.classify_intent(instruction).to_payload(),
        'context': classifier.validate_security_context(instruction).to_payload(),
    }, output_format))


@cli.command(
    name='schema',
    help='Print the JSON Schema of parsed instruction sets to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


if __name__ == '__main__':
    cli()
