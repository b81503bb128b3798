"""Ordered attribute rule tables used by the description parser.

Each category is a list of rules evaluated top to bottom. For single-valued
categories the first matching rule wins, so more specific patterns (compound
accents, numeric ages, "middle-aged") must appear before broader ones.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Matched:
    """A category outcome carrying the extracted value."""

    value: str


@dataclass(frozen=True)
class Unspecified:
    """A category outcome for text that triggered no rule."""


UNMATCHED = Unspecified()

Outcome = Matched | Unspecified


@dataclass(frozen=True)
class Rule:
    """A single pattern rule.

    Args:
        pattern: Compiled case-insensitive regex
        value: Fixed value, or a callable deriving the value from the match.
            A callable returning None declines the match.
    """

    pattern: re.Pattern
    value: str | Callable[[re.Match], str | None]

    def evaluate(self, text: str) -> Outcome:
        match = self.pattern.search(text)
        if match is None:
            return UNMATCHED
        if callable(self.value):
            derived = self.value(match)
            return Matched(derived) if derived else UNMATCHED
        return Matched(self.value)


def rule(pattern: str, value: str | Callable[[re.Match], str | None]) -> Rule:
    """Build a rule from a pattern string, compiled case-insensitively."""
    return Rule(re.compile(pattern, re.IGNORECASE), value)


def first_match(rules: list[Rule], text: str) -> Outcome:
    """Return the outcome of the first rule that matches text."""
    for candidate in rules:
        outcome = candidate.evaluate(text)
        if isinstance(outcome, Matched):
            return outcome
    return UNMATCHED


def all_matches(rules: list[Rule], text: str) -> list[str]:
    """Return every distinct value produced by matching rules, in rule order."""
    values: list[str] = []
    for candidate in rules:
        outcome = candidate.evaluate(text)
        if isinstance(outcome, Matched) and outcome.value not in values:
            values.append(outcome.value)
    return values


# Gender

GENDER_RULES: list[Rule] = [
    rule(r"\bgender[- ]?neutral\b|\bandrogynous\b|\bnon[- ]?binary\b|\bgenderless\b", "neutral"),
    rule(r"\bfemales?\b|\bwom[ae]n\b|\bgirls?\b|\blad(?:y|ies)\b|\bgals?\b|\blatina\b", "female"),
    rule(r"\bmales?\b|\bm[ae]n\b|\bboys?\b|\bguys?\b|\bgentlem[ae]n\b|\bdude\b|\blatino\b", "male"),
]

# Accent

# Words that describe accent strength or timbre rather than origin
_NON_ORIGIN_WORDS = {
    "deep",
    "thick",
    "heavy",
    "strong",
    "slight",
    "light",
    "mild",
    "subtle",
    "faint",
    "neutral",
    "nice",
    "cool",
    "an",
    "a",
}


def _accent_from_phrase(match: re.Match) -> str | None:
    words = match.group(1).strip().lower().split()
    if not words or len(" ".join(words)) >= 30:
        return None
    if any(word in _NON_ORIGIN_WORDS for word in words):
        return None
    return " ".join(word.capitalize() for word in words)


ACCENT_RULES: list[Rule] = [
    rule(r"\blatina\b|\blatino\b", "Latin American"),
    # Compound accents before their single-word parts
    rule(r"\bindian[- ]american\b", "Indian-American"),
    rule(r"\bmexican[- ]american\b", "Mexican-American"),
    rule(r"\blatin[- ]american\b", "Latin American"),
    rule(r"\bafrican[- ]american\b", "African-American"),
    rule(r"\basian[- ]american\b", "Asian-American"),
    rule(r"\bsouth african\b", "South African"),
    rule(r"\bnigerian?\b", "Nigerian"),
    rule(r"\bpakistani?\b", "Pakistani"),
    rule(r"\bbangladesh(?:i)?\b", "Bangladeshi"),
    rule(r"\bsri lank(?:an|a)\b", "Sri Lankan"),
    rule(r"\bsouthern[- ]american\b|\bus[- ]southern\b", "Southern American"),
    rule(r"\bnorth(?:ern)?[- ]american\b", "Northern American"),
    rule(r"\beastern europe(?:an)?\b", "Eastern European"),
    rule(r"\bnew zealand(?:er)?\b|\bkiwi\b", "New Zealand"),
    rule(r"\bnew york(?:er)?\b|\bnyc\b", "New York"),
    # Regional accents
    rule(r"\bscottish\b|\bscotland\b|\bscots?\b", "Scottish"),
    rule(r"\birish\b|\bireland\b", "Irish"),
    rule(r"\bwelsh\b|\bwales\b", "Welsh"),
    rule(r"\bcockney\b|\blondon(?:er)?\b", "Cockney"),
    rule(r"\byorkshire\b", "Yorkshire"),
    rule(r"\bliverpool\b|\bscouse\b", "Liverpool"),
    rule(r"\bmanchester\b|\bmancunian\b", "Manchester"),
    rule(r"\btexan\b|\btexas\b", "Texan"),
    rule(r"\bcalifornian?\b", "Californian"),
    rule(r"\bboston(?:ian)?\b", "Boston"),
    rule(r"\bsouthern\b|\bsouth\b", "Southern"),
    rule(r"\bnorthern\b|\bnorth\b", "Northern"),
    # Single-word national accents
    rule(r"\bbrit(?:ish)?\b|\buk\b|\bengland\b", "British"),
    rule(r"\baustralian?\b|\baussie\b", "Australian"),
    rule(r"\bcanadian\b|\bcanada\b", "Canadian"),
    rule(r"\bindian?\b", "Indian"),
    rule(r"\bmexican\b|\bmexico\b", "Mexican"),
    rule(r"\bspanish\b|\bspain\b|\bespañol\b", "Spanish"),
    rule(r"\blatin\b", "Latin American"),
    rule(r"\barab(?:ic)?\b|\bmiddle eastern\b", "Arabic"),
    rule(r"\bfrench\b|\bfrance\b", "French"),
    rule(r"\bgerman(?:y)?\b", "German"),
    rule(r"\bitalian\b|\bitaly\b", "Italian"),
    rule(r"\bvietnam(?:ese)?\b", "Vietnamese"),
    rule(r"\bthai(?:land)?\b", "Thai"),
    rule(r"\bfilipin[oa]\b|\bphilippines?\b", "Filipino"),
    rule(r"\bindonesian?\b", "Indonesian"),
    rule(r"\bmalaysian?\b", "Malaysian"),
    rule(r"\bchinese\b|\bchina\b", "Chinese"),
    rule(r"\bjapan(?:ese)?\b", "Japanese"),
    rule(r"\bkorean?\b", "Korean"),
    rule(r"\bswedish\b|\bsweden\b", "Swedish"),
    rule(r"\bnorwegian\b|\bnorway\b", "Norwegian"),
    rule(r"\bdanish\b|\bdenmark\b", "Danish"),
    rule(r"\bdutch\b|\bnetherlands\b", "Dutch"),
    rule(r"\bportuguese\b|\bportugal\b", "Portuguese"),
    rule(r"\bbrazilian\b|\bbrazil\b", "Brazilian"),
    rule(r"\basian?\b", "Asian"),
    rule(r"\bafrican?\b", "African"),
    rule(r"\bamerican\b|\busa\b|\bu\.s\.(?:a\.)?", "American"),
    rule(r"\brussian?\b", "Russian"),
    rule(r"\bukrain(?:ian|e)\b|\bukranian\b", "Ukrainian"),
    rule(r"\bpolish\b|\bpoland\b", "Polish"),
    rule(r"\bczech\b", "Czech"),
    rule(r"\bhungar(?:ian|y)\b", "Hungarian"),
    rule(r"\bromanian?\b", "Romanian"),
    rule(r"\bbulgarian?\b", "Bulgarian"),
    rule(r"\bserbian?\b", "Serbian"),
    rule(r"\bcroatian?\b", "Croatian"),
    # Unlisted origin named explicitly, e.g. "with a Maltese accent"
    rule(r"\b(?:with|has)\s+(?:an?\s+)?([a-z][a-z\s-]*?)\s+accent\b", _accent_from_phrase),
]

# Age group


def _age_from_years(match: re.Match) -> str:
    years = int(match.group(1))
    if years < 30:
        return "young"
    if years < 55:
        return "middle-aged"
    return "older"


AGE_RULES: list[Rule] = [
    rule(r"\b(\d{1,2})[- ]?(?:years?[- ]old|yo)\b", _age_from_years),
    rule(r"\bgen[- ]?z\b|\bgeneration z\b|\bzoomer\b", "young"),
    rule(r"\bmillennials?\b|\bgen[- ]?[xy]\b|\bgeneration [xy]\b", "middle-aged"),
    rule(r"\b(?:baby )?boomers?\b", "older"),
    # "middle-aged" before "aged"
    rule(r"\bmiddle[- ]aged?\b|\b(?:30|40)'?s\b|\bthirties\b|\bforties\b", "middle-aged"),
    rule(
        r"\byoung(?:er)?\b|\byouthful\b|\byouth\b|\bteen(?:age|ager)?s?\b|\b20'?s\b"
        r"|\btwenties\b|\bcollege\b|\bstudent\b|\bgirls?\b|\bboys?\b|\bkid\b",
        "young",
    ),
    rule(
        r"\bold(?:er)?\b|\belder(?:ly)?\b|\bsenior\b|\baged\b|\b[5-8]0'?s\b"
        r"|\bfifties\b|\bsixties\b|\bseventies\b|\bgrand(?:pa|ma|father|mother)\b",
        "older",
    ),
]

# Tone and energy (set-valued)

TONE_RULES: list[Rule] = [
    rule(r"\bprofessional\b|\bpolished\b|\bbusiness(?:like)?\b|\bcorporate\b", "professional"),
    rule(r"\bclear(?:ly)?\b|\bcrisp\b|\barticulate\b|\benunciat\w*\b", "clear"),
    rule(r"\bwarm\b|\bwelcoming\b", "warm"),
    rule(r"\bfriendly\b|\bapproachable\b", "friendly"),
    rule(r"\bcalm\b|\brelaxed\b|\bserene\b|\bsoothing\b|\bpeaceful\b", "calm"),
    rule(r"\benerg(?:etic|y)\b|\bupbeat\b|\blively\b|\benthusiastic\b|\bvibrant\b", "energetic"),
    rule(r"\bconfident\b|\bassured\b", "confident"),
    rule(r"\bauthoritative\b|\bcommanding\b", "authoritative"),
    rule(r"\bcheerful\b|\bbubbly\b|\bhappy\b", "cheerful"),
    rule(r"\bcasual\b|\blaid[- ]back\b|\bchill\b", "casual"),
    rule(r"\bconversational\b|\bnatural\b", "conversational"),
    rule(r"\bserious\b|\bformal\b|\bstern\b", "serious"),
    rule(r"\bplayful\b|\bfun\b|\bquirky\b", "playful"),
    rule(r"\bsarcastic\b|\bdry\b|\bdeadpan\b", "sarcastic"),
    rule(r"\bsassy\b|\bfeisty\b", "sassy"),
    rule(r"\bwitty\b|\bclever\b", "witty"),
    rule(r"\bdramatic\b|\btheatrical\b|\bexpressive\b", "dramatic"),
    rule(r"\bgentle\b|\bsoft[- ]spoken\b", "gentle"),
]

# Character archetype

CHARACTER_RULES: list[Rule] = [
    rule(r"\bpirate\b", "pirate"),
    rule(r"\bdetective\b|\bsherlock\b|\binvestigator\b", "detective"),
    rule(r"\bspy\b|\bsecret agent\b", "spy"),
    rule(r"\bwizard\b|\bsorcer(?:er|ess)\b|\bmage\b", "wizard"),
    rule(r"\bninja\b", "ninja"),
    rule(r"\bknight\b", "knight"),
    rule(r"\bwarrior\b", "warrior"),
    rule(r"\bvillain\b", "villain"),
    rule(r"\bhero\b", "hero"),
    rule(r"\bnarrator\b|\bstoryteller\b", "narrator"),
    rule(r"\bannouncer\b", "announcer"),
    rule(r"\bpodcaster\b|\bhost\b", "host"),
    rule(r"\bbodybuilder\b|\bmeathead\b", "bodybuilder"),
    rule(r"\brapper\b", "rapper"),
    rule(r"\bsinger\b", "singer"),
    rule(r"\bteacher\b|\bprofessor\b|\binstructor\b", "teacher"),
    rule(r"\bdoctor\b|\bnurse\b", "doctor"),
    rule(r"\blawyer\b|\battorney\b|\bjudge\b", "lawyer"),
    rule(r"\bsoldier\b|\bmilitary\b|\bveteran\b|\bdrill sergeant\b", "soldier"),
    rule(r"\bcoach\b|\btrainer\b", "coach"),
    rule(r"\bcowboy\b", "cowboy"),
]

# Free-form timbre and identity tags (set-valued)

TAG_RULES: list[Rule] = [
    rule(r"\bdeep\b|\bbass\b|\bbaritone\b", "deep"),
    rule(r"\bhigh[- ]pitched\b|\bsqueaky\b", "high-pitched"),
    rule(r"\braspy\b|\bgravelly\b|\bhusky\b|\bhoarse\b", "raspy"),
    rule(r"\bsmooth\b|\bsilky\b|\bvelvety\b", "smooth"),
    rule(r"\bbreathy\b|\bairy\b", "breathy"),
    rule(r"\bsoft\b|\bquiet\b|\bwhisper\w*\b", "soft"),
    rule(r"\bpowerful\b|\bbooming\b|\bloud\b|\bstrong voice\b", "powerful"),
    rule(r"\bnasal\b", "nasal"),
    rule(r"\bbright\b|\bcrystal\b", "bright"),
    rule(r"\bgay\b|\bqueer\b|\blesbian\b|\bhomosexual\b|\blgbtq?\+?", "lgbtq"),
]
