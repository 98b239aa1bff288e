"""Text folding shared by team lookups.

Upstream names carry HTML entities and accents inconsistently across
endpoints (``San José State`` vs ``San Jose State``), so lookups compare
folded keys rather than raw strings.
"""

from __future__ import annotations

import html as _html
import re
import unicodedata


def fold_text(value: str) -> str:
    """Fold a name for case- and accent-insensitive comparison.

    Steps:
    1. Decode HTML entities (``&amp;`` → ``&``)
    2. NFKD-normalize Unicode and strip combining marks (``é`` → ``e``)
    3. Lowercase and collapse runs of whitespace

    Examples::

        >>> fold_text("Texas A&amp;M")
        'texas a&m'
        >>> fold_text("  San José  State ")
        'san jose state'
    """
    if not value:
        return ""
    s = _html.unescape(str(value))
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.lower()
    s = re.sub(r"\s+", " ", s)
    return s.strip()
