"""Creator audience metrics: subscriber/view labels and budget fit.

Shared by the text extractors (which rarely get reliable numbers from free
text) and the mock plan generator. Every function here is a deterministic
function of its arguments; callers that want variety pass in a randomly
chosen label or view rate.
"""

from __future__ import annotations

import hashlib
import math
import re
from typing import NamedTuple, Optional, Union

from schemas.campaign_plan import DEFAULT_AVERAGE_VIEWS, DEFAULT_BUDGET_FIT

# Typical videos get 10-20% of the subscriber count in views.
DEFAULT_VIEW_RATE = 0.15

SUBSCRIBER_LABELS = (
    "500K subscribers",
    "1.2M subscribers",
    "750K subscribers",
    "250K subscribers",
    "3.5M subscribers",
)

HIGH_FIT = "High fit for your budget"
MEDIUM_FIT = DEFAULT_BUDGET_FIT
LOW_FIT = "Low fit for your budget"

_COUNT_RE = re.compile(r"(\d+(?:,\d{3})*(?:\.\d+)?)\s*([KkMm](?![a-z]))?")
_MONEY_RE = re.compile(r"\$?(\d[\d,]*)")

_UNITS = {"k": 1_000, "m": 1_000_000}


# ---------------------------------------------------------------------------
# Subscriber / view labels
# ---------------------------------------------------------------------------

def positive_count(value: object) -> Optional[float]:
    """Return ``value`` as a float if it is a finite positive number, else None.

    JSON happily yields ``Infinity``, ``1e999`` and 400-digit integers; none of
    those is a usable audience size.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        count = float(value)
    except OverflowError:
        return None
    if not math.isfinite(count) or count <= 0:
        return None
    return count


def parse_subscriber_count(label: Union[str, int, float, None]) -> Optional[float]:
    """Parse '1.2M subscribers' / '500K' / '80,000' into an absolute count."""
    if isinstance(label, bool) or label is None:
        return None
    if isinstance(label, (int, float)):
        return positive_count(label)
    match = _COUNT_RE.search(str(label))
    if not match:
        return None
    number = float(match.group(1).replace(",", ""))
    unit = (match.group(2) or "").lower()
    return positive_count(number * _UNITS.get(unit, 1))


def format_count(count: float) -> str:
    """Format an absolute count as '750', '180K' or '1.2M'."""
    thousands = round(count / 1_000)
    if thousands >= 1_000:
        return f"{thousands / 1_000:.1f}M"
    if thousands >= 1:
        return f"{thousands}K"
    return str(int(round(count)))


def format_subscriber_label(count: float) -> str:
    return f"{format_count(count)} subscribers"


def estimate_average_views(
    subscribers: Union[str, int, float, None],
    view_rate: float = DEFAULT_VIEW_RATE,
) -> str:
    """Estimate an average-views label from a subscriber label.

    '1.2M subscribers' at the default 15% rate gives '180K'.
    Unparsable input falls back to the default views label.
    """
    count = parse_subscriber_count(subscribers)
    if count is None or view_rate <= 0:
        return DEFAULT_AVERAGE_VIEWS
    return format_count(count * view_rate)


def subscriber_label_for(name: str, labels: tuple[str, ...] = SUBSCRIBER_LABELS) -> str:
    """Pick a subscriber label for a creator name, stable across runs."""
    digest = hashlib.md5((name or "").strip().lower().encode("utf-8")).hexdigest()
    return labels[int(digest, 16) % len(labels)]


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

class BudgetRange(NamedTuple):
    min: float
    max: float


DEFAULT_BUDGET_RANGE = BudgetRange(10_000, 20_000)

# (lowest, highest) subscriber counts that suit each budget tier
_MICRO_TIER = (50_000, 200_000)
_MID_TIER = (200_000, 1_000_000)
_LARGE_TIER = (1_000_000, float("inf"))


def parse_budget_range(budget: Optional[str]) -> BudgetRange:
    """Parse '$5,000 - $10,000', 'under $5,000', '$50,000+' into a range."""
    if not budget or not isinstance(budget, str):
        return DEFAULT_BUDGET_RANGE

    numbers = [int(n.replace(",", "")) for n in _MONEY_RE.findall(budget) if n.replace(",", "")]
    if not numbers:
        return DEFAULT_BUDGET_RANGE
    if len(numbers) >= 2:
        return BudgetRange(numbers[0], numbers[1])

    value = numbers[0]
    lowered = budget.lower()
    if "under" in lowered or "less than" in lowered:
        return BudgetRange(0, value)
    if "over" in lowered or "more than" in lowered or "+" in budget:
        return BudgetRange(value, value * 2)
    return BudgetRange(value * 0.5, value * 1.5)


def _tier_for(budget_range: BudgetRange) -> tuple[float, float]:
    if budget_range.min < 5_000:
        return _MICRO_TIER
    if budget_range.min < 25_000:
        return _MID_TIER
    return _LARGE_TIER


def creator_sizes_for_budget(budget_range: BudgetRange) -> list[str]:
    """Subscriber labels that suit a budget tier."""
    tier = _tier_for(budget_range)
    if tier is _MICRO_TIER:
        sizes = ["50K", "80K", "120K", "180K"]
    elif tier is _MID_TIER:
        sizes = ["250K", "500K", "750K", "950K"]
    else:
        sizes = ["1.2M", "1.5M", "2.5M", "3.5M"]
    return [f"{s} subscribers" for s in sizes]


def budget_fit(subscribers: Union[str, int, float, None], budget_range: BudgetRange) -> str:
    """Describe how well a creator's audience size suits the budget tier.

    Inside the tier is a high fit, within a factor of two of its edges a
    medium fit, anything further a low fit.
    """
    count = parse_subscriber_count(subscribers)
    if count is None:
        return DEFAULT_BUDGET_FIT
    low, high = _tier_for(budget_range)
    if low <= count <= high:
        return HIGH_FIT
    if low / 2 <= count <= high * 2:
        return MEDIUM_FIT
    return LOW_FIT
