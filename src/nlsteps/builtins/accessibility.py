"""Built-in matcher table of the accessibility domain.

Accessibility instructions talk about pages, elements and WCAG checks
rather than HTTP exchanges, but they resolve to the same closed set of
action types: opening a page is a `send_request`, capturing the DOM is a
`store_response`, reading an ARIA attribute is a `read_field`.
"""

from nlsteps.extensions import Matcher, Table

send_request = Matcher(
    action='send_request',
    verbs=['navigate', 'open', 'visit', 'load', 'go to', 'browse'],
    objects=['page', 'url', 'site', 'website', 'screen'],
    patterns=[
        r'\b(navigate|go)\s+to\b',
        r'\b(open|visit|load|browse)\b.*\b(page|url|site|website|screen)\b',
    ],
)

store_response = Matcher(
    action='store_response',
    verbs=['capture', 'snapshot', 'save', 'store', 'scan'],
    objects=['dom', 'snapshot', 'screenshot', 'markup', 'html', 'accessibility tree'],
    patterns=[
        r'\b(capture|save|store|take)\b.*\b(dom|snapshot|screenshot|markup|html)\b',
        r'\b(scan|run)\b.*\b(axe|page|accessibility)\b',
    ],
)

read_field = Matcher(
    action='read_field',
    verbs=['read', 'get', 'extract', 'inspect', 'find', 'locate'],
    objects=['attribute', 'aria', 'label', 'role', 'alt', 'tabindex', 'lang'],
    patterns=[
        r'\b(read|get|extract|inspect)\b.*\b(attribute|aria-\w+|label|role)\b',
        r'\b(find|locate)\b.*\b(element|button|link|input|landmark)\b',
    ],
)

count = Matcher(
    action='count',
    verbs=['count', 'tally', 'total'],
    objects=['images', 'headings', 'links', 'buttons', 'elements', 'violations', 'landmarks'],
    patterns=[
        r'\bhow\s+many\b',
        r'\bnumber\s+of\b',
        r'\b(count|tally)\b.*\b(images?|headings?|links?|buttons?|elements?|violations?|landmarks?)\b',
    ],
)

verify = Matcher(
    action='verify',
    verbs=['verify', 'check', 'ensure', 'confirm', 'validate', 'assert', 'expect'],
    objects=[
        'alt text', 'contrast', 'keyboard', 'focus', 'wcag',
        'screen reader', 'heading order', 'accessible', 'violation',
    ],
    patterns=[
        r'\b(verify|check|ensure|confirm|validate|assert|expect)\b',
        r'\b(should|must|has to)\b.*\b(be|have|contain|meet)\b',
        r'\bwcag\s*\d(\.\d)*\b',
        r'\b(no|zero)\s+(violations?|errors?)\b',
    ],
)

measure_time = Matcher(
    action='measure_time',
    verbs=['measure', 'time', 'track'],
    objects=['load time', 'render', 'interactive', 'performance'],
    patterns=[
        r'\b(measure|time|track)\b.*\b(load|render|interactive|paint)\b',
        r'\bpage\s+load\b',
    ],
)

table = Table(
    domain='accessibility',
    matchers=[
        send_request,
        store_response,
        read_field,
        count,
        verify,
        measure_time,
    ],
)
