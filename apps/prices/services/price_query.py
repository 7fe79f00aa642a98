"""Price lookup service - cheapest store for an item."""

import logging
import re
from datetime import timedelta
from typing import List, Optional

from django.conf import settings
from django.db.models import Max, Q, QuerySet
from django.utils import timezone
from fuzzywuzzy import fuzz

from ..models import PriceObservation, normalize_item_name
from .exceptions import PriceDataNotFoundError
from .rounding import round2, percentage


logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 60
SUGGESTION_LIMIT = 5
# Most recently observed names considered for suggestions
SUGGESTION_CANDIDATE_LIMIT = 500


def get_default_max_days() -> int:
    return getattr(settings, 'PRICE_DEFAULT_MAX_DAYS', 90)


def item_name_contains(item_name: str) -> Q:
    """
    Match observations whose item name contains `item_name`.

    Compares casefolded names, the same normalization the ledger keys on,
    so non-ASCII names match regardless of case on every backend.
    """
    return Q(key__item_name_normalized__contains=normalize_item_name(item_name))


def find_matching_observations(
    *,
    item_name: str,
    max_days: Optional[int] = None
) -> QuerySet[PriceObservation]:
    """
    Observations whose item name contains `item_name` (case-insensitive)
    and that were observed within the last `max_days` days.

    Ordered cheapest first; among equal prices the most recent comes first.
    """
    if max_days is None:
        max_days = get_default_max_days()
    cutoff = timezone.now() - timedelta(days=max_days)

    return (
        PriceObservation.objects
        .filter(item_name_contains(item_name), observed_at__gte=cutoff)
        .order_by('price', '-observed_at', 'store')
    )


def store_price_entry(observation: PriceObservation) -> dict:
    return {
        'store': observation.store,
        'price': observation.price,
        'observed_at': observation.observed_at,
        'unit': observation.unit,
        'verified': observation.verified,
        'report_count': observation.report_count,
    }


def cheapest_per_store(observations) -> List[dict]:
    """
    Reduce observations to one entry per store holding that store's lowest
    price, sorted ascending by price.

    Expects observations ordered by price then most recent first, so the
    first observation seen for a store is the one kept.
    """
    by_store = {}
    for observation in observations:
        if observation.store not in by_store:
            by_store[observation.store] = store_price_entry(observation)

    return sorted(by_store.values(), key=lambda entry: entry['price'])


def calculate_savings(all_stores: List[dict]) -> Optional[dict]:
    """
    Savings from buying at the cheapest store instead of the dearest one.

    Returns None when fewer than two stores are known.
    """
    if len(all_stores) < 2:
        return None

    min_price = all_stores[0]['price']
    max_price = all_stores[-1]['price']
    amount = max_price - min_price

    return {
        'amount': round2(amount),
        'percentage': percentage(amount, max_price),
    }


def cheapest_store(*, item_name: str, max_days: Optional[int] = None) -> dict:
    """
    Find the cheapest store for an item.

    Args:
        item_name: Item name or part of it (case-insensitive)
        max_days: Only consider observations this many days old or newer

    Returns:
        dict with:
            - item_name: The query as given
            - cheapest_store: Cheapest store entry
            - all_stores: One entry per store, ascending by price
            - savings: {'amount', 'percentage'} or None for a single store

    Raises:
        PriceDataNotFoundError: If no observation matches
    """
    observations = list(
        find_matching_observations(item_name=item_name, max_days=max_days)
    )
    logger.debug("%d observations match %r", len(observations), item_name)

    if not observations:
        raise PriceDataNotFoundError("No price data found for this item")

    all_stores = cheapest_per_store(observations)

    return {
        'item_name': item_name,
        'cheapest_store': all_stores[0],
        'all_stores': all_stores,
        'savings': calculate_savings(all_stores),
    }


def _normalize(text: str) -> str:
    text = text.lower().strip()
    text = re.sub(r'\s+', ' ', text)
    return re.sub(r'[^\w\s-]', '', text)


def suggest_item_names(
    *,
    item_name: str,
    max_days: Optional[int] = None,
    threshold: int = SUGGESTION_THRESHOLD,
    limit: int = SUGGESTION_LIMIT
) -> List[str]:
    """
    Known item names that look like `item_name`, best match first.

    Used to help out when a lookup finds nothing (typos, plural forms).
    Only names observed within the last `max_days` days are candidates,
    most recent first, capped at SUGGESTION_CANDIDATE_LIMIT.
    """
    query = _normalize(item_name)
    if not query:
        return []

    if max_days is None:
        max_days = get_default_max_days()
    cutoff = timezone.now() - timedelta(days=max_days)

    candidates = (
        PriceObservation.objects
        .filter(observed_at__gte=cutoff)
        .values('item_name')
        .annotate(last_observed=Max('observed_at'))
        .order_by('-last_observed', 'item_name')
        [:SUGGESTION_CANDIDATE_LIMIT]
    )

    scored = {}
    for row in candidates:
        name = row['item_name']
        score = fuzz.token_set_ratio(query, _normalize(name))
        if score >= threshold:
            key = name.casefold()
            if key not in scored or scored[key][0] < score:
                scored[key] = (score, name)

    ranked = sorted(scored.values(), key=lambda x: (-x[0], x[1]))
    return [name for _, name in ranked[:limit]]
