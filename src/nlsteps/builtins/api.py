"""Built-in matcher table of the HTTP API domain.

Matchers are listed in tie-break order: request sending first, then body
attachment, response storage, field reads, counting, verification and
timing.
"""

from nlsteps.extensions import Matcher, Table

_METHODS = r'(get|post|put|patch|delete)'
_STORE_VERBS = r'(store|save|capture|get|retrieve|fetch|grab|keep|hold|record|collect|obtain)'
_READ_VERBS = r'(read|get|extract|retrieve|fetch|check|find|obtain|access|look|grab|pull|store)'

send_request = Matcher(
    action='send_request',
    verbs=[
        'send', 'make', 'execute', 'perform', 'do', 'call',
        'invoke', 'issue', 'submit', 'fire', 'trigger',
    ],
    objects=['request', 'call', 'http', 'api'],
    patterns=[
        rf'\b(send|make|execute|perform|do|call|invoke|issue|submit|fire|trigger)\b.*\b{_METHODS}\b.*\b(request|call)\b',
        rf'\b{_METHODS}\b.*\b(to|from|at|endpoint|url)\b',
        rf'\b(send|make)\b.*\b{_METHODS}\b',
    ],
)

attach_body = Matcher(
    action='attach_body',
    verbs=['attach', 'add', 'include', 'set', 'send', 'with', 'use', 'provide', 'create', 'post'],
    objects=[
        'body', 'data', 'payload', 'content', 'json',
        'request body', 'post', 'title', 'name', 'value',
    ],
    patterns=[
        r'\b(attach|add|include|set|send|with|use|provide)\b.*\b(request\s+body|body|data|payload)\b',
        r'\brequest\s+body\s+with\b',
        r'\bwith\s+(request\s+)?body\b',
        r'\bcreate.*\bwith\s+(title|name)\b',
        r'\bpost.*\bwith\s+(title|name)\b',
        r'\btitle\s+["\']([^"\']+)["\']',
    ],
)

store_response = Matcher(
    action='store_response',
    verbs=[
        'store', 'save', 'capture', 'get', 'retrieve', 'fetch',
        'grab', 'keep', 'hold', 'record', 'collect', 'obtain',
    ],
    objects=[
        'response', 'result', 'output', 'data', 'status', 'code',
        'body', 'headers', 'header', 'id', 'value',
    ],
    patterns=[
        rf'\b{_STORE_VERBS}\b.*\b(response|result|output)\b',
        rf'\b{_STORE_VERBS}\b.*\b(status|code|body|headers?)\b',
        rf'\b{_STORE_VERBS}\b.*\b(id|value)\b.*\b(from|of)\b.*\b(response|body)\b',
    ],
)

read_field = Matcher(
    action='read_field',
    verbs=[
        'read', 'get', 'extract', 'retrieve', 'fetch', 'check', 'find',
        'obtain', 'access', 'look', 'grab', 'pull', 'store',
    ],
    objects=['field', 'value', 'property', 'attribute', 'data', 'header', 'element', 'id', 'identifier'],
    patterns=[
        rf'\b{_READ_VERBS}\b.*\b(value|field|property|attribute)\b',
        rf'\b{_READ_VERBS}\b.*\b(of|from)\b.*\b(header|field|property|response)\b',
        r'\b(check|verify|validate)\b.*\b(field|property|value|header)\b',
        r'\bstore.*\bid\b.*\bvalue\b',
        r'\bstore.*\bthe\s+id\b',
    ],
)

count = Matcher(
    action='count',
    verbs=['count', 'tally', 'sum', 'total', 'calculate', 'determine', 'find'],
    objects=['number', 'count', 'total', 'amount', 'quantity', 'items', 'objects', 'elements', 'entries'],
    patterns=[
        r'\b(count|tally|sum|total|calculate|determine|find)\b.*\b(number|count|total|amount|quantity)\b',
        r'\bhow\s+many\b',
        r'\bnumber\s+of\b',
        r'\b(count|tally)\b.*\b(items?|objects?|elements?|entries)\b',
    ],
)

verify = Matcher(
    action='verify',
    verbs=['verify', 'check', 'assert', 'validate', 'ensure', 'confirm', 'test', 'expect'],
    objects=['status', 'code', 'value', 'field', 'response', 'result', 'type', 'equals', 'matches'],
    patterns=[
        r'\b(verify|check|assert|validate|ensure|confirm|test|expect)\b',
        r'\b(should|must|has to)\b.*\b(be|equal|match|contain)\b',
        r'\b(equals?|matches?|contains?|includes?)\b',
    ],
)

measure_time = Matcher(
    action='measure_time',
    verbs=['measure', 'time', 'track', 'record', 'calculate', 'determine'],
    objects=['time', 'duration', 'latency', 'speed', 'performance', 'response time'],
    patterns=[
        r'\b(measure|time|track|record|calculate|determine)\b.*\b(time|duration|latency|speed|performance)\b',
        r'\bresponse\s+time\b',
        r'\bhow\s+(long|fast|quick)\b',
    ],
)

table = Table(
    domain='api',
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
