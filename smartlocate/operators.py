"""Map ISP / organization strings from IP services to carrier names."""
from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

from .models import UNKNOWN

AS_NUMBERS: Dict[str, str] = {
    "AS4134": "中国电信",
    "AS9808": "中国移动",
    "AS4837": "中国联通",
    "AS58453": "中国广电",
}

CARRIER_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"中国移动|China Mobile", re.IGNORECASE), "中国移动"),
    (re.compile(r"中国电信|China Telecom|Chinanet|AS4134", re.IGNORECASE), "中国电信"),
    (re.compile(r"中国联通|China Unicom|AS4837", re.IGNORECASE), "中国联通"),
    (re.compile(r"中国广电|AS58453", re.IGNORECASE), "中国广电"),
]

_TOKEN_SPLIT = re.compile(r"[\s-]")


def format_operator_name(raw: str | None) -> str:
    """Canonical carrier name for ``raw``, or its first token if unrecognised.

    >>> format_operator_name("AS4837 CHINA UNICOM China169 Backbone")
    '中国联通'
    >>> format_operator_name("Comcast Cable Communications, LLC")
    'Comcast'
    """
    if not raw:
        return UNKNOWN
    text = raw.strip()
    if not text or text == UNKNOWN:
        return UNKNOWN

    if text in AS_NUMBERS:
        return AS_NUMBERS[text]

    for pattern, name in CARRIER_PATTERNS:
        if pattern.search(text):
            return name

    return _TOKEN_SPLIT.split(text)[0] or UNKNOWN
