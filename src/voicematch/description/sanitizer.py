"""Content-policy sanitizer for voice descriptions.

Rewrites trigger phrases the generation provider is known to reject.
The replacement table comes from configuration and is empty by default,
in which case text passes through untouched.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SanitizeResult:
    """Outcome of sanitizing a description.

    Args:
        sanitized: Text after all substitutions
        was_modified: Whether any trigger phrase matched
        notes: Human-readable substitution notes, in table order
    """

    sanitized: str
    was_modified: bool = False
    notes: list[str] = field(default_factory=list)


def sanitize(text: str, replacements: Mapping[str, str] | None = None) -> SanitizeResult:
    """Replace trigger phrases case-insensitively on word boundaries.

    Args:
        text: Raw description text
        replacements: Ordered mapping of trigger phrase to safe replacement

    Returns:
        SanitizeResult with the rewritten text and one note per trigger hit
    """
    if not replacements:
        return SanitizeResult(sanitized=text)

    sanitized = text
    notes: list[str] = []
    for trigger, replacement in replacements.items():
        if not trigger.strip():
            continue
        pattern = re.compile(rf"\b{re.escape(trigger)}\b", re.IGNORECASE)
        sanitized, count = pattern.subn(lambda _: replacement, sanitized)
        if count:
            notes.append(f'Replaced "{trigger}" with "{replacement}"')

    return SanitizeResult(
        sanitized=sanitized, was_modified=bool(notes), notes=notes
    )
