"""Built-in security vocabulary.

Holds the matcher table of the security domain, the registry of the
seven security testing intents with their contextual bonus words, and
the catalogue of known attack payloads.

The registry is an immutable tuple in tie-break order: when two intents
score equally, the one registered first wins.
"""

from nlsteps.extensions import Matcher, Table
from nlsteps.schema import SecurityIntent

#: Registered security intents, in tie-break order.
INTENTS: tuple[SecurityIntent, ...] = (
    SecurityIntent(
        id='SEC_INJ',
        type='Injection',
        description='SQL/XSS/NoSQL injection prevention testing',
        keywords=(
            'inject', 'sql', 'script', '<script>', 'xss', 'nosql', 'or 1=1',
            'union select', 'drop table', 'alert(', 'javascript:', 'onload=',
        ),
        bonus_words=('prevent', 'block', 'reject', 'fail', 'error'),
        min_assertions=('status ≠ 200', 'error present', 'no sensitive data'),
    ),
    SecurityIntent(
        id='SEC_AUTH',
        type='Authentication',
        description='Authentication mechanism testing',
        keywords=(
            'login', 'password', 'token', 'authenticate', 'signin',
            'credentials', 'auth', 'session', 'logout',
        ),
        bonus_words=('verify', 'check', 'validate', 'require'),
        min_assertions=('status validation', 'error present'),
    ),
    SecurityIntent(
        id='SEC_AUTHZ',
        type='Authorization',
        description='Access control and permission testing',
        keywords=(
            'access', 'permission', 'unauthorized', 'forbidden', 'role',
            'admin', 'privilege', 'without token', 'no auth',
        ),
        bonus_words=('deny', 'forbidden', 'unauthorized', 'restrict'),
        min_assertions=('status 401/403', 'access denied'),
    ),
    SecurityIntent(
        id='SEC_DATA',
        type='Sensitive Data Exposure',
        description='Sensitive information leakage testing',
        keywords=(
            'password', 'credit card', 'ssn', 'sensitive', 'personal',
            'private', 'confidential', 'secret', 'key',
        ),
        bonus_words=('hide', 'mask', 'exclude', 'not contain'),
        min_assertions=('sensitive field absent', 'data masking'),
    ),
    SecurityIntent(
        id='SEC_HEADER',
        type='Security Headers',
        description='HTTP security headers validation',
        keywords=(
            'header', 'csp', 'hsts', 'x-frame-options', 'content-security-policy',
            'strict-transport-security', 'x-xss-protection',
        ),
        bonus_words=('present', 'set', 'include', 'contain'),
        min_assertions=('header present', 'header value correct'),
    ),
    SecurityIntent(
        id='SEC_METHOD',
        type='HTTP Method Misuse',
        description='HTTP method security testing',
        keywords=(
            'method', 'get instead of post', 'post instead of get',
            'put', 'delete', 'patch', 'options', 'head',
        ),
        bonus_words=('allow', 'reject', 'support', 'method'),
        min_assertions=('method rejected', 'status 405'),
    ),
    SecurityIntent(
        id='SEC_RATE',
        type='Rate Limiting/Abuse',
        description='Rate limiting and abuse prevention testing',
        keywords=(
            'rate', 'limit', 'throttle', 'abuse', 'flood', 'spam',
            'brute force', 'dos', 'multiple requests',
        ),
        bonus_words=('limit', 'throttle', 'block', 'prevent'),
        min_assertions=('rate limit triggered', 'status 429'),
    ),
)

#: Verbs requesting a verification.
VERIFICATION_WORDS = ('verify', 'check', 'ensure', 'validate', 'confirm')

#: Terms describing the expected failure of an attack.
FAILURE_WORDS = ('fail', 'error', 'reject', 'deny', 'block', 'prevent')

#: Known SQL injection payloads, in detection order.
SQL_INJECTION_PAYLOADS = (
    "' or 1=1 --",
    "' union select",
    "'; drop table",
    "' or '1'='1",
    "admin'--",
    "' or 1=1#",
    "1' or '1'='1",
)

#: Known XSS payloads, in detection order.
XSS_INJECTION_PAYLOADS = (
    '<script>alert(1)</script>',
    '<img src=x onerror=alert(1)>',
    'javascript:alert(1)',
    '<svg onload=alert(1)>',
)

#: Payload generated for SQL injection instructions without an explicit one.
DEFAULT_SQL_PAYLOAD = "' OR 1=1 --"

#: Payload generated for XSS instructions without an explicit one.
DEFAULT_XSS_PAYLOAD = '<script>alert(1)</script>'

send_request = Matcher(
    action='send_request',
    verbs=['send', 'make', 'submit', 'call', 'attempt', 'try', 'login', 'access'],
    objects=['request', 'endpoint', 'api', 'login', 'form'],
    patterns=[
        r'\b(send|make|submit)\b.*\b(get|post|put|patch|delete)\b',
        r'\b(attempt|try)\b.*\b(login|access|request|call)\b',
        r'\b(call|access)\b.*\b(endpoint|api|resource)\b',
    ],
)

attach_body = Matcher(
    action='attach_body',
    verbs=['attach', 'inject', 'include', 'use', 'provide', 'submit'],
    objects=['payload', 'body', 'sql', 'script', 'xss', 'credentials', 'password'],
    patterns=[
        r'\b(attach|include|use|provide)\b.*\b(payload|body|credentials)\b',
        r'\binject\w*\b.*\b(payload|sql|script|into)\b',
        r"'\s*or\s+'?1'?\s*=\s*'?1",
        r'<script\b',
    ],
)

store_response = Matcher(
    action='store_response',
    verbs=['store', 'save', 'capture', 'record'],
    objects=['response', 'token', 'session', 'cookie', 'headers'],
    patterns=[
        r'\b(store|save|capture|record)\b.*\b(response|token|session|cookie|headers?)\b',
    ],
)

read_field = Matcher(
    action='read_field',
    verbs=['read', 'extract', 'inspect', 'get'],
    objects=['header', 'field', 'cookie', 'token', 'value'],
    patterns=[
        r'\b(read|extract|inspect|get)\b.*\b(header|field|cookie|value)\b',
    ],
)

count = Matcher(
    action='count',
    verbs=['count', 'repeat'],
    objects=['attempts', 'requests', 'times'],
    patterns=[
        r'\b(\d+|multiple|many)\s+(requests|attempts|times)\b',
        r'\bhow\s+many\b',
    ],
)

verify = Matcher(
    action='verify',
    verbs=['verify', 'check', 'ensure', 'validate', 'confirm', 'expect', 'assert'],
    objects=['blocked', 'rejected', 'denied', 'status', 'error', 'not contain', 'forbidden'],
    patterns=[
        r'\b(verify|check|ensure|validate|confirm|expect|assert)\b',
        r'\b(should|must)\b.*\b(fail|be\s+rejected|be\s+blocked|be\s+denied|return)\b',
        r'\b(4\d\d|429)\b',
    ],
)

measure_time = Matcher(
    action='measure_time',
    verbs=['measure', 'time', 'track'],
    objects=['response time', 'latency', 'delay'],
    patterns=[
        r'\b(measure|time|track)\b.*\b(response|latency|delay)\b',
        r'\bresponse\s+time\b',
    ],
)

table = Table(
    domain='security',
    matchers=[
        send_request,
        attach_body,
        store_response,
        read_field,
        count,
        verify,
        measure_time,
    ],
)
