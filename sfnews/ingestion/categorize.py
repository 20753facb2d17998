"""Keyword-based category inference."""

from typing import Dict, Iterable, Optional

from ..models import Category

# Keyword -> category. Insertion order matters: the first keyword found in
# the text wins.
CATEGORY_KEYWORDS: Dict[str, Category] = {
    # Tech
    "technology": Category.TECH,
    "tech": Category.TECH,
    "artificial intelligence": Category.TECH,
    " ai ": Category.TECH,
    "startup": Category.TECH,
    "silicon valley": Category.TECH,
    "software": Category.TECH,
    "engineer": Category.TECH,
    "developer": Category.TECH,
    "layoff": Category.TECH,
    "openai": Category.TECH,
    "salesforce": Category.TECH,
    # Politics
    "politics": Category.POLITICS,
    "government": Category.POLITICS,
    "election": Category.POLITICS,
    "mayor": Category.POLITICS,
    "board of supervisors": Category.POLITICS,
    "supervisor": Category.POLITICS,
    "city hall": Category.POLITICS,
    "legislation": Category.POLITICS,
    "ballot": Category.POLITICS,
    "proposition": Category.POLITICS,
    "policy": Category.POLITICS,
    # Economy
    "economy": Category.ECONOMY,
    "business": Category.ECONOMY,
    "housing": Category.ECONOMY,
    "real estate": Category.ECONOMY,
    "rent": Category.ECONOMY,
    "jobs": Category.ECONOMY,
    "employment": Category.ECONOMY,
    "downtown": Category.ECONOMY,
    "commercial": Category.ECONOMY,
    "retail": Category.ECONOMY,
    "development": Category.ECONOMY,
}

# Declared tags are matched whole, so padding is dropped.
TAG_KEYWORDS: Dict[str, Category] = {keyword.strip(): category for keyword, category in CATEGORY_KEYWORDS.items()}

# Flair substring -> category, checked before the keyword table.
FLAIR_KEYWORDS: Dict[str, Category] = {
    "tech": Category.TECH,
    "job": Category.TECH,
    "politic": Category.POLITICS,
    "government": Category.POLITICS,
    "housing": Category.ECONOMY,
    "rent": Category.ECONOMY,
}


def category_from_tags(tags: Iterable[str]) -> Optional[Category]:
    """Look declared provider tags up in the keyword table."""
    for tag in tags:
        category = TAG_KEYWORDS.get(tag.lower().strip())
        if category is not None:
            return category
    return None


def category_from_flair(flair: Optional[str]) -> Optional[Category]:
    """Map a community post flair onto a category."""
    if not flair:
        return None
    lowered = flair.lower()
    for keyword, category in FLAIR_KEYWORDS.items():
        if keyword in lowered:
            return category
    return None


def category_from_text(text: str) -> Optional[Category]:
    """Search free text for the first category keyword."""
    lowered = f" {text.lower()} "
    for keyword, category in CATEGORY_KEYWORDS.items():
        if keyword in lowered:
            return category
    return None


def infer_category(
    text: str,
    tags: Iterable[str] = (),
    flair: Optional[str] = None,
) -> Category:
    """
    Infer an article's category.

    Declared tags win, then flair, then a keyword search over the text.
    Anything unmatched lands in the catch-all local category.
    """
    return (
        category_from_tags(tags)
        or category_from_flair(flair)
        or category_from_text(text)
        or Category.LOCAL
    )
