"""Deterministic attribute extraction from voice descriptions.

Each category is resolved independently from its own ordered rule table.
Single-valued categories (gender, accent, age group, character) take the
first matching rule; tones and tags collect every rule that fires.
"""

import logging

from .models import UNSPECIFIED, AttributeSet
from .rules import (
    ACCENT_RULES,
    AGE_RULES,
    CHARACTER_RULES,
    GENDER_RULES,
    TAG_RULES,
    TONE_RULES,
    Matched,
    Rule,
    all_matches,
    first_match,
)

logger = logging.getLogger(__name__)


class DescriptionParser:
    """Extracts an AttributeSet from sanitized description text.

    Rule tables default to the built-in ones and can be replaced per
    category for testing or tuning. Parsing has no side effects: the same
    text always yields an identical AttributeSet.
    """

    def __init__(
        self,
        gender_rules: list[Rule] | None = None,
        accent_rules: list[Rule] | None = None,
        age_rules: list[Rule] | None = None,
        tone_rules: list[Rule] | None = None,
        character_rules: list[Rule] | None = None,
        tag_rules: list[Rule] | None = None,
    ) -> None:
        self.gender_rules = GENDER_RULES if gender_rules is None else gender_rules
        self.accent_rules = ACCENT_RULES if accent_rules is None else accent_rules
        self.age_rules = AGE_RULES if age_rules is None else age_rules
        self.tone_rules = TONE_RULES if tone_rules is None else tone_rules
        self.character_rules = (
            CHARACTER_RULES if character_rules is None else character_rules
        )
        self.tag_rules = TAG_RULES if tag_rules is None else tag_rules

    def parse(self, text: str) -> AttributeSet:
        """Parse description text into attributes.

        Args:
            text: Sanitized description text

        Returns:
            AttributeSet with unmatched categories left unspecified
        """
        gender = first_match(self.gender_rules, text)
        accent = first_match(self.accent_rules, text)
        age = first_match(self.age_rules, text)
        character = first_match(self.character_rules, text)

        attributes = AttributeSet(
            gender=gender.value if isinstance(gender, Matched) else UNSPECIFIED,
            accent=accent.value if isinstance(accent, Matched) else None,
            age_group=age.value if isinstance(age, Matched) else UNSPECIFIED,
            tones=frozenset(all_matches(self.tone_rules, text)),
            character=character.value if isinstance(character, Matched) else None,
            tags=frozenset(all_matches(self.tag_rules, text)),
        )
        logger.debug(f"Parsed attributes: {attributes.to_dict()}")
        return attributes


_default_parser = DescriptionParser()


def parse_description(text: str) -> AttributeSet:
    """Parse text with the built-in rule tables."""
    return _default_parser.parse(text)
