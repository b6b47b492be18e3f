"""Keyword tables for the heuristic extractor.

Each table is an ordered list of (keywords, effect, label) rules. Keywords
are lower-case substrings matched against the lower-cased utterance; the
first rule with any matching keyword wins for its category.
"""

from __future__ import annotations

import re

from ..models import TimeRange

# Named eras. Order matters: "后印象派" also contains "印象派".
ERA_RULES: list[tuple[list[str], TimeRange, str]] = [
    (["文艺复兴", "renaissance"], TimeRange(1400, 1600), "文艺复兴时期"),
    (["巴洛克", "baroque"], TimeRange(1600, 1750), "巴洛克时期"),
    (["印象派", "印象主义", "impressionis"], TimeRange(1850, 1900), "印象派时期"),
    (["现代", "modern"], TimeRange(1900, 1980), "现代艺术时期"),
    (["当代", "contemporary"], TimeRange(1980, 2024), "当代艺术时期"),
]

# "19世纪", "第19世纪", "19th century"
CENTURY_PATTERN = re.compile(r"(\d{1,2})\s*(?:世纪|(?:st|nd|rd|th)\s+century)", re.IGNORECASE)

ARTIST_RULES: list[tuple[list[str], str, str]] = [
    (["达芬奇", "达·芬奇", "da vinci", "leonardo"], "Leonardo da Vinci", "达·芬奇"),
    (["梵高", "凡高", "van gogh"], "Vincent van Gogh", "梵高"),
    (["毕加索", "picasso"], "Pablo Picasso", "毕加索"),
    (["北斋", "hokusai"], "Katsushika Hokusai", "葛饰北斋"),
    (["维米尔", "vermeer"], "Johannes Vermeer", "维米尔"),
    (["达利", "salvador dal"], "Salvador Dalí", "达利"),
    (["波提切利", "botticelli"], "Sandro Botticelli", "波提切利"),
    (["格兰特·伍德", "grant wood"], "Grant Wood", "格兰特·伍德"),
]

# Movement names match the catalog's movement field exactly
MOVEMENT_RULES: list[tuple[list[str], str, str]] = [
    (["后印象", "post-impressionis", "post impressionis"], "Post-Impressionism", "后印象派"),
    (["超现实", "surrealis"], "Surrealism", "超现实主义"),
    (["立体主义", "立体派", "cubis"], "Cubism", "立体主义"),
    (["浮世绘", "ukiyo"], "Ukiyo-e", "浮世绘"),
    (["黄金时代", "golden age"], "Dutch Golden Age", "荷兰黄金时代"),
    (["地方主义", "regionalism"], "American Regionalism", "美国地方主义"),
]


def century_range(century: int) -> TimeRange:
    """The years of a 1-based century, e.g. 19 -> 1800-1899."""
    start = (century - 1) * 100
    return TimeRange(start, start + 99)
