"""Fixed enumerations shared by the store, the feed engine and the API."""

from enum import StrEnum


class Category(StrEnum):
    """Topic a post is filed under."""

    ACADEMIC = "academic"
    SOCIAL = "social"
    EVENTS = "events"
    CAMPUS_LIFE = "campus-life"
    FOOD = "food"
    HOUSING = "housing"
    TECHNOLOGY = "technology"
    SPORTS = "sports"
    CLUBS = "clubs"
    GENERAL = "general"


CATEGORY_NAMES: dict[Category, str] = {
    Category.ACADEMIC: "Academic",
    Category.SOCIAL: "Social",
    Category.EVENTS: "Events",
    Category.CAMPUS_LIFE: "Campus Life",
    Category.FOOD: "Food & Dining",
    Category.HOUSING: "Housing",
    Category.TECHNOLOGY: "Technology",
    Category.SPORTS: "Sports",
    Category.CLUBS: "Clubs & Organizations",
    Category.GENERAL: "General Discussion",
}


class RankingMode(StrEnum):
    """Ordering applied to the live feed."""

    NEWEST = "newest"
    BEST = "best"
    TRENDING = "trending"


class ReportStatus(StrEnum):
    """Lifecycle of a report; approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


TERMINAL_REPORT_STATUSES = frozenset({ReportStatus.APPROVED, ReportStatus.REJECTED})

REPORT_REASONS: tuple[str, ...] = (
    "Breaks the Content Policy",
    "Harassment",
    "Threatening violence",
    "Spam",
    "Sharing personal information",
    "Impersonation",
    "Prohibited transaction",
)


class AdminView(StrEnum):
    """Post listings available on the admin console."""

    ALL = "all"
    RECENT = "recent"
    POPULAR = "popular"
    FLAGGED = "flagged"


def normalize_category(value: object) -> Category:
    """Return the category for ``value``, falling back to ``general``."""
    if isinstance(value, Category):
        return value
    if isinstance(value, str):
        try:
            return Category(value.strip().lower())
        except ValueError:
            return Category.GENERAL
    return Category.GENERAL
