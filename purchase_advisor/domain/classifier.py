"""Item type classification from free-text item name and purpose"""

from purchase_advisor.domain.models import ItemType

# Checked in this order; an item matching several lists takes the first.
CONSUMABLE_KEYWORDS = (
    "pizza", "burger", "meal", "dinner", "lunch", "breakfast", "snack",
    "coffee", "tea", "drink", "restaurant", "food", "eating", "takeout",
    "delivery", "groceries", "sandwich", "sushi", "chinese", "mexican",
    "italian", "fast food", "dining", "cafe", "bakery", "ice cream",
)

SERVICE_KEYWORDS = (
    "subscription", "service", "membership", "gym", "netflix", "spotify",
    "insurance", "repair", "maintenance", "cleaning", "haircut", "salon",
    "massage", "therapy", "consultation", "lesson", "class", "course",
)

DIGITAL_KEYWORDS = (
    "app", "software", "game", "ebook", "digital", "online", "download",
    "streaming", "cloud", "saas", "license", "plugin", "addon",
)

_ORDERED_KEYWORDS = (
    (ItemType.CONSUMABLE, CONSUMABLE_KEYWORDS),
    (ItemType.SERVICE, SERVICE_KEYWORDS),
    (ItemType.DIGITAL, DIGITAL_KEYWORDS),
)


def as_text(value) -> str:
    """Coerce an optional text input to str ("" for None)"""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def combined_text(item_name, purpose) -> str:
    """Lower-cased "item purpose" string used by keyword heuristics"""
    return f"{as_text(item_name)} {as_text(purpose)}".lower()


def contains_any(text: str, keywords) -> bool:
    """True if any keyword occurs as a substring of text"""
    return any(keyword in text for keyword in keywords)


def classify_item_type(item_name, purpose) -> ItemType:
    """
    Classify an item as consumable, service, digital or durable.

    Substring match against fixed keyword lists in priority order
    (consumable -> service -> digital). Anything unmatched, including
    empty input, is treated as a durable physical good.
    """
    text = combined_text(item_name, purpose)

    for item_type, keywords in _ORDERED_KEYWORDS:
        if contains_any(text, keywords):
            return item_type

    return ItemType.DURABLE
