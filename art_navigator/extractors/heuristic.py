"""Keyword-based local extractor."""

from __future__ import annotations

from . import register
from .base import QueryExtractor
from ..mappings.countries import country_label, match_country
from ..mappings.keywords import (
    ARTIST_RULES,
    CENTURY_PATTERN,
    ERA_RULES,
    MOVEMENT_RULES,
    century_range,
)
from ..models import ExtractionOutcome, ExtractionResult, TimeRange

NO_MATCH_MESSAGE = "抱歉，我没能从您的描述中识别出时间或地点。请尝试提及时期（如“文艺复兴”）或国家（如“意大利”）。"


def _first_rule(text: str, rules):
    for keywords, effect, label in rules:
        if any(keyword in text for keyword in keywords):
            return effect, label
    return None


@register
class HeuristicExtractor(QueryExtractor):
    """
    Deterministic keyword matcher producing the same shape as the remote path.

    Four independent categories (era, country, artist, movement) are tested
    against the lower-cased utterance; the first matching rule in each
    category wins and adds a clause to the confirmation message.
    """

    name = "Local keyword matcher"
    short_name = "HEURISTIC"

    def extract(self, utterance: str) -> ExtractionOutcome:
        text = (utterance or "").lower()
        clauses: list[str] = []

        era = self._match_era(text)
        country = match_country(text)
        artist = _first_rule(text, ARTIST_RULES)
        movement = _first_rule(text, MOVEMENT_RULES)

        if era:
            time_range, label = era
            clauses.append(f"已设置时间范围为{label}（{time_range.start}-{time_range.end}年）。")
        if country:
            clauses.append(f"已筛选{country_label(country)}地区的艺术品。")
        if artist:
            clauses.append(f"已筛选{artist[1]}的作品。")
        if movement:
            clauses.append(f"已筛选{movement[1]}流派的作品。")

        result = ExtractionResult(
            start_year=era[0].start if era else None,
            end_year=era[0].end if era else None,
            country=country,
            city=None,
        )

        if not clauses:
            self._log_info("No keyword matched")
            return ExtractionOutcome(result=result, message=NO_MATCH_MESSAGE, source="heuristic")

        self._log_info(f"Matched {len(clauses)} categories: {result.to_dict()}")
        return ExtractionOutcome(
            result=result,
            message="".join(clauses),
            artist=artist[0] if artist else None,
            movement=movement[0] if movement else None,
            source="heuristic",
        )

    @staticmethod
    def _match_era(text: str) -> tuple[TimeRange, str] | None:
        named = _first_rule(text, ERA_RULES)
        if named:
            return named
        match = CENTURY_PATTERN.search(text)
        if match:
            century = int(match.group(1))
            if century > 0:
                return century_range(century), f"{century}世纪"
        return None
