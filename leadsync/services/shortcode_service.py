"""
Shortcode service - short, unique campaign identifiers.

Candidates come from the campaign name (acronym, first three letters or
a cleaned truncation). Collisions are resolved by numbered suffixes that
never push the code past six characters.
"""
import logging
import random
import re
import string
from typing import Awaitable, Callable, List, Optional

from leadsync.config import settings
from leadsync.core.exceptions import ShortcodeLookupError

logger = logging.getLogger(__name__)

MIN_SHORTCODE_LENGTH = 2
MAX_SHORTCODE_LENGTH = 6
DEFAULT_SHORTCODE = "CAMP"

STOP_WORDS = frozenset([
    "the", "and", "or", "for", "of", "in", "on", "at", "to", "from", "with", "by",
    "a", "an", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "can",
])

_SHORTCODE_RE = re.compile(r"^[A-Z0-9]+$")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")
_STARTS_ALNUM_RE = re.compile(r"^[A-Za-z0-9]")
_RANDOM_ALPHABET = string.ascii_uppercase + string.digits

ShortcodeLookup = Callable[[str], Awaitable[bool]]


def validate_shortcode(shortcode: Optional[str]) -> bool:
    """2-6 characters, upper-case ASCII letters and digits only."""
    if not shortcode or not isinstance(shortcode, str):
        return False
    if not MIN_SHORTCODE_LENGTH <= len(shortcode) <= MAX_SHORTCODE_LENGTH:
        return False
    return bool(_SHORTCODE_RE.match(shortcode))


def significant_words(name: str) -> List[str]:
    """Words that carry meaning: no numbers, no stop words."""
    words = [w for w in name.split() if _STARTS_ALNUM_RE.match(w)]
    return [
        w for w in words
        if not w.isdigit() and w.lower() not in STOP_WORDS
    ]


def acronym_candidate(name: str) -> str:
    """
    Initials of the significant words, or the first three letters when only
    one (long enough) word is left. Empty string when neither applies.
    """
    words = significant_words(name)
    if len(words) >= 2:
        return "".join(w[0] for w in words).upper()
    if len(words) == 1 and len(words[0]) >= 3:
        return words[0][:3].upper()
    return ""


def fallback_candidate(name: str) -> str:
    """Cleaned, upper-cased name; four characters for multi-word names."""
    if not name or not name.strip():
        return DEFAULT_SHORTCODE

    cleaned = _NON_ALNUM_RE.sub("", name).upper()
    if not cleaned:
        return DEFAULT_SHORTCODE

    # "Temp Accom" -> "TEMP", not "TEMPAC"
    if re.search(r"\s", name.strip()):
        candidate = cleaned[:4]
    else:
        candidate = cleaned[:MAX_SHORTCODE_LENGTH]

    if not validate_shortcode(candidate):
        return DEFAULT_SHORTCODE
    return candidate


def candidate_for(name: str) -> str:
    """Base shortcode for a name before collision handling."""
    if not name or not name.strip():
        return DEFAULT_SHORTCODE
    acronym = acronym_candidate(name)
    if validate_shortcode(acronym):
        return acronym
    return fallback_candidate(name)


def numbered_variant(base: str, counter: int) -> str:
    """base + counter, with the base shortened so the result fits."""
    suffix = str(counter)
    return base[:MAX_SHORTCODE_LENGTH - len(suffix)] + suffix


def random_shortcode() -> str:
    return "".join(random.choice(_RANDOM_ALPHABET) for _ in range(MAX_SHORTCODE_LENGTH))


class ShortcodeService:
    """
    Generates unique shortcodes.

    Uniqueness is checked through an injected async lookup
    (code -> already taken?). The check is best effort: the caller's
    unique constraint settles races between check and write.
    """

    def __init__(self, exists: ShortcodeLookup, max_suffix: int = settings.SHORTCODE_MAX_SUFFIX):
        self.exists = exists
        self.max_suffix = max_suffix

    async def generate(self, name: str) -> str:
        """Generate a unique shortcode for a campaign name."""
        base = candidate_for(name)
        return await self.resolve_collision(base)

    async def is_taken(self, shortcode: str) -> bool:
        try:
            return await self.exists(shortcode)
        except Exception as e:
            raise ShortcodeLookupError(str(e)) from e

    async def resolve_collision(self, base: str) -> str:
        """Return base if free, else the first free numbered variant."""
        if not await self.is_taken(base):
            return base

        for counter in range(1, self.max_suffix + 1):
            variant = numbered_variant(base, counter)
            if not await self.is_taken(variant):
                return variant

        code = random_shortcode()
        logger.warning(f"All numbered variants of '{base}' are taken, using random shortcode {code}")
        return code
