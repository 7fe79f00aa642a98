"""Price ledger service - records price reports with concurrency protection."""

import logging
from datetime import timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from ..models import PriceObservation, StoreItemKey, normalize_item_name
from .exceptions import PriceValidationError


logger = logging.getLogger(__name__)

DEFAULT_UNIT = 'item'
# price column is max_digits=10, decimal_places=2
MAX_PRICE = Decimal('100000000')


def get_report_window_days() -> int:
    return getattr(settings, 'PRICE_REPORT_WINDOW_DAYS', 30)


def get_verification_threshold() -> int:
    return getattr(settings, 'PRICE_VERIFICATION_THRESHOLD', 3)


def _require_text(field: str, value) -> str:
    if value is None or not str(value).strip():
        raise PriceValidationError(
            "Item name, category, store, and price are required"
            f" ({field} is missing)"
        )
    return str(value).strip()


def parse_price(value) -> Decimal:
    """
    Convert a reported price to a 2 dp Decimal.

    Raises:
        PriceValidationError: If the price is missing, not a number, negative
            or too large for the price column
    """
    if value is None or value == '' or isinstance(value, bool):
        raise PriceValidationError(
            "Item name, category, store, and price are required (price is missing)"
        )

    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise PriceValidationError(f"Price must be a number, got {value!r}")

    if not price.is_finite():
        raise PriceValidationError(f"Price must be a number, got {value!r}")
    if price < 0:
        raise PriceValidationError("Price must be greater than or equal to 0")
    try:
        price = price.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise PriceValidationError(f"Price must be less than {MAX_PRICE}")
    if price >= MAX_PRICE:
        raise PriceValidationError(f"Price must be less than {MAX_PRICE}")

    return price


@transaction.atomic
def record_price(
    *,
    item_name: str,
    category: str,
    store: str,
    price,
    unit: Optional[str] = None,
    reported_by=None
) -> Tuple[PriceObservation, bool]:
    """
    Record a price report for an item at a store.

    A report folds into an existing observation when one exists for the same
    item name (case-insensitive, exact) and store whose window started within
    the last PRICE_REPORT_WINDOW_DAYS days. The folded observation takes the
    new price, its report_count goes up by one and it becomes verified once
    report_count reaches PRICE_VERIFICATION_THRESHOLD. Otherwise a new
    observation starts a new window.

    The (item, store) key row is locked with select_for_update() so that
    concurrent reports for the same pair don't lose increments.

    Args:
        item_name: Item name as reported
        category: Item category
        store: Store identifier
        price: Non-negative price (Decimal, number or numeric string)
        unit: Unit of sale, defaults to 'item'
        reported_by: Reporting user (optional)

    Returns:
        Tuple of (observation, created)

    Raises:
        PriceValidationError: If a required field is missing or price is invalid
    """
    item_name = _require_text('item_name', item_name)
    category = _require_text('category', category)
    store = _require_text('store', store)
    price = parse_price(price)
    unit = (unit or '').strip() or DEFAULT_UNIT

    now = timezone.now()
    window_start = now - timedelta(days=get_report_window_days())

    key, _ = StoreItemKey.objects.get_or_create(
        item_name_normalized=normalize_item_name(item_name),
        store=store,
    )
    # Lock the key so reports for this pair apply one at a time
    key = StoreItemKey.objects.select_for_update().get(pk=key.pk)

    existing = (
        key.observations
        .filter(observed_at__gte=window_start)
        .order_by('-observed_at')
        .first()
    )

    if existing is not None:
        was_verified = existing.verified
        existing.price = price
        existing.report_count += 1
        if existing.report_count >= get_verification_threshold():
            existing.verified = True
        existing.save(update_fields=['price', 'report_count', 'verified', 'updated_at'])

        logger.info(
            "Price report folded into %s (report_count=%d)",
            existing, existing.report_count
        )
        if existing.verified and not was_verified:
            logger.info("Price for %s is now verified", existing)
        return existing, False

    observation = PriceObservation.objects.create(
        key=key,
        item_name=item_name,
        category=category,
        store=store,
        price=price,
        unit=unit,
        observed_at=now,
        reported_by=reported_by,
    )
    logger.info("New price observation %s", observation)
    return observation, True
