"""Best-effort bike name extraction from free-text chat messages.

Every helper here returns ``None`` instead of raising when nothing usable is
found, so the responder can move on to its next rule.
"""

import re

MAX_NAME_WORDS = 5

SPEC_TRIGGERS = (
    "specs?",
    "specifications?",
    "details?",
    "info",
    "information",
    "price",
    "cost",
    "mileage",
    "engine",
    "power",
    "torque",
    "speed",
    "weight",
    "dimensions?",
    "brakes?",
    "suspension",
    "colou?rs?",
    "features?",
    "about",
)
COMPARISON_TRIGGERS = ("compare", "comparison", "difference", "between", "better", "best", "which")

_SPEC_ALTERNATION = "|".join(SPEC_TRIGGERS)

# Name after the last trigger word: "show me specs of yamaha r15".
_NAME_AFTER_TRIGGER = re.compile(rf"^.*\b(?:{_SPEC_ALTERNATION})\b\s+(.+)$")
# Name before the first trigger word: "pulsar ns200 specs".
_NAME_BEFORE_TRIGGER = re.compile(rf"^(.+?)\s+(?:{_SPEC_ALTERNATION})\b")

_COMPARE_AFTER_KEYWORD = re.compile(
    rf"\b(?:{'|'.join(COMPARISON_TRIGGERS)})\b\s+(.+?)\s+(?:and|vs|versus|or|with)\s+(.+)$"
)
_COMPARE_VERSUS = re.compile(r"^(.+?)\s+(?:vs|versus)\s+(.+)$")
_COMPARE_ALTERNATIVE = re.compile(r"^(.+?)\s+or\s+(.+)$")
_COMPARISON_WORD = re.compile(rf"\b(?:{'|'.join(COMPARISON_TRIGGERS)})\b")

FILLER_WORDS = frozenset(
    {
        "a", "an", "and", "any", "are", "bike", "bikes", "can", "do", "does", "for", "get", "give",
        "has", "have", "how", "i", "in", "is", "it", "its", "know", "me", "model", "models", "motorcycle",
        "motorcycles", "much", "of", "on", "or", "please", "scooter", "scooters", "see", "show", "some",
        "tell", "that", "the", "there", "these", "this", "those", "to", "vs", "versus", "want", "what",
        "whats", "with", "you", "your",
    }
)
TRIGGER_WORDS = frozenset(
    {
        "about", "best", "better", "between", "brake", "brakes", "color", "colors", "colour", "colours",
        "compare", "comparison", "cost", "detail", "details", "difference", "dimension", "dimensions",
        "engine", "feature", "features", "info", "information", "mileage", "power", "price", "spec",
        "specification", "specifications", "specs", "speed", "suspension", "top", "torque", "weight",
        "which",
    }
)
STRIP_WORDS = FILLER_WORDS | TRIGGER_WORDS


def normalize_message(message: str) -> str:
    text = re.sub(r"[^a-z0-9\s-]", " ", message.lower())
    return re.sub(r"\s+", " ", text).strip()


def clean_name_fragment(fragment: str) -> str | None:
    words = fragment.split()
    while words and words[0] in STRIP_WORDS:
        words.pop(0)
    while words and words[-1] in STRIP_WORDS:
        words.pop()
    if not words or len(words) > MAX_NAME_WORDS:
        return None
    return " ".join(words)


def extract_bike_name_candidates(message: str) -> list[str]:
    """Possible single-bike names, broadest first.

    The whole message with filler trimmed from both ends comes first so names
    containing a trigger word ("speed 400") stay intact; the fragments after
    and before a trigger word follow as fallbacks.
    """
    text = normalize_message(message)
    candidates = [clean_name_fragment(text)]
    for pattern in (_NAME_AFTER_TRIGGER, _NAME_BEFORE_TRIGGER):
        match = pattern.search(text)
        if match:
            candidates.append(clean_name_fragment(match.group(1)))

    unique: list[str] = []
    for candidate in candidates:
        if candidate and candidate not in unique:
            unique.append(candidate)
    return unique


def extract_bike_name(message: str) -> str | None:
    candidates = extract_bike_name_candidates(message)
    return candidates[0] if candidates else None


def _split_pair(pattern: re.Pattern, text: str) -> tuple[str, str] | None:
    match = pattern.search(text)
    if not match:
        return None
    first = clean_name_fragment(match.group(1))
    second = clean_name_fragment(match.group(2))
    if first and second:
        return first, second
    return None


def extract_bike_names(message: str) -> tuple[str, str] | None:
    text = normalize_message(message)
    patterns = [_COMPARE_AFTER_KEYWORD, _COMPARE_VERSUS]
    # "X or Y" only reads as a comparison next to a comparison word.
    if _COMPARISON_WORD.search(text):
        patterns.append(_COMPARE_ALTERNATIVE)
    for pattern in patterns:
        names = _split_pair(pattern, text)
        if names:
            return names
    return None


def extract_alternative_bike_names(message: str) -> tuple[str, str] | None:
    """Bare "X or Y" with no comparison word; callers must confirm both names exist."""
    return _split_pair(_COMPARE_ALTERNATIVE, normalize_message(message))


_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_leading_number(value) -> float | None:
    """Parse the numeric prefix of a spec string such as ``"40 kmpl"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    return float(match.group(1))
