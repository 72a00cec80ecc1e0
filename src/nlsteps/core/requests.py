"""Request-level validation and profiling.

`validate_request` is the caller-level gate run before parsing: it is
the only place raising on malformed input. `profile_request` collects
the request-level facts of an instruction (method, URL, authentication,
category) and never raises.
"""

from re import IGNORECASE
from re import compile as regexp
from urllib.parse import urlsplit

from nlsteps.errors import ErrorContext, InstructionRequestError
from nlsteps.names import HTTP_METHODS
from nlsteps.schema import RequestProfile
from nlsteps.settings import ParserSettings

#: Method phrases of the initial method detection, in priority order.
METHOD_HINTS = (
    ('POST', regexp(r'\bsend\s+(?:a\s+)?post\b', IGNORECASE)),
    ('PUT', regexp(r'\bsend\s+(?:a\s+)?put\b', IGNORECASE)),
    ('PATCH', regexp(r'\bsend\s+(?:a\s+)?patch\b', IGNORECASE)),
    ('DELETE', regexp(r'\bsend\s+(?:a\s+)?delete\b', IGNORECASE)),
    ('GET', regexp(r'\bsend\s+(?:a\s+)?get\b', IGNORECASE)),
)

#: Quoted URLs overriding the target URL, in priority order.
URL_OVERRIDES = (
    regexp(r'"(https?://[^"]+)"'),
    regexp(r'"([a-zA-Z0-9.-]+\.[a-zA-Z]{2,}/[^"]*)"'),
)

#: Phrases requiring an authenticated request.
AUTH_PHRASES = (
    'with authentication',
    'with token',
    'bearer token',
    'authenticated',
    'auth token',
    'authorization',
    'with auth',
)

#: Category keywords, in priority order.
CATEGORIES = (
    ('Performance', ('performance', 'response time', 'measure time')),
    ('Regression', ('error', 'validation', 'invalid', 'fail')),
    ('Security', ('security', 'authentication', 'authorization', 'token')),
)


def detect_method(instruction: str, hint: str | None = None) -> str:
    """Resolve the initial HTTP method of an instruction.

    Args:
        instruction: Full instruction text.
        hint: Caller-provided method, used when it is a known method.

    Returns:
        The uppercase method, `GET` if none is detected.
    """
    if hint and (method := hint.strip().upper()) in HTTP_METHODS:
        return method

    for method, pattern in METHOD_HINTS:
        if pattern.search(instruction):
            return method

    return 'GET'


def ensure_scheme(url: str) -> str:
    """Prefix scheme-less URLs with `https://`."""
    url = url.strip()
    if url and not url.startswith(('http://', 'https://')):
        return f'https://{url}'

    return url


def resolve_url(instruction: str, url: str) -> str:
    """Return the URL an instruction targets.

    A quoted absolute URL, or a quoted `host.tld/path`, in the instruction
    overrides the target URL.
    """
    for pattern in URL_OVERRIDES:
        if match := pattern.search(instruction):
            return ensure_scheme(match.group(1))

    return ensure_scheme(url)


def split_url(url: str) -> tuple[str, str]:
    """Split a URL into its base (scheme and host) and its path."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url, '/'

    if not parts.scheme or not parts.netloc:
        return url, '/'

    return f'{parts.scheme}://{parts.netloc}', parts.path or '/'


def validate_request(instruction: str, url: str,
                     settings: ParserSettings | None = None) -> None:
    """Validate a parse request before invoking the parser.

    Args:
        instruction: Instruction text.
        url: Target URL.
        settings: Length bounds, defaults are used if omitted.

    Raises:
        InstructionRequestError: If the instruction or the URL is empty,
            the instruction is out of the length bounds or the URL is not
            an absolute http(s) URL.
    """
    settings = settings or ParserSettings()

    if not instruction or not instruction.strip():
        raise InstructionRequestError('Instruction is required')

    if not url or not url.strip():
        raise InstructionRequestError('Target URL is required')

    length = len(instruction.strip())
    if length < settings.min_instruction_length:
        raise InstructionRequestError.for_instruction(
            f'Instruction must be at least {settings.min_instruction_length} characters long',
            instruction,
        )

    if length > settings.max_instruction_length:
        raise InstructionRequestError.for_instruction(
            f'Instruction must be at most {settings.max_instruction_length} characters long',
            instruction,
        )

    try:
        parts = urlsplit(url.strip())
    except ValueError as base:
        raise InstructionRequestError(
            f'Invalid target URL {url!r}',
            context=ErrorContext(element={'url': url}),
        ) from base

    if parts.scheme not in ('http', 'https') or not parts.netloc:
        raise InstructionRequestError(
            f'Invalid target URL {url!r}',
            context=ErrorContext(element={'url': url}),
        )


def requires_auth(instruction: str) -> bool:
    """Check whether an instruction asks for an authenticated request."""
    lowered = instruction.lower()
    return any(phrase in lowered for phrase in AUTH_PHRASES)


def categorize(instruction: str) -> str:
    """Return the test category of an instruction, `Smoke` by default."""
    lowered = instruction.lower()
    for category, keywords in CATEGORIES:
        if any(keyword in lowered for keyword in keywords):
            return category

    return 'Smoke'


def profile_request(instruction: str, url: str,
                    method_hint: str | None = None) -> RequestProfile:
    """Collect request-level facts of an instruction.

    Args:
        instruction: Instruction text.
        url: Target URL.
        method_hint: Optional HTTP method of the instruction.

    Returns:
        The request profile.
    """
    method = detect_method(instruction, method_hint)
    target = resolve_url(instruction, url)

    base_url, endpoint = split_url(target)

    lines = instruction.strip().splitlines()
    summary = lines[0].strip() if lines else ''

    return RequestProfile(
        method=method,
        url=target,
        base_url=base_url,
        endpoint=endpoint,
        requires_auth=requires_auth(instruction),
        category=categorize(instruction),
        title=f'{method} {endpoint}',
        summary=summary or f'Test {method} request to {endpoint}',
    )
