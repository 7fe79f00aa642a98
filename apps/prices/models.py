from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


def normalize_item_name(name):
    """Comparison key for ledger matching: trimmed, case-folded."""
    return name.strip().casefold()


class StoreItemKey(models.Model):
    """
    One row per (item name, store) pair seen by the ledger.

    Observations hang off this row, and price reports lock it so that
    reports for the same pair are applied one at a time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    item_name_normalized = models.CharField(max_length=200)
    store = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'store_item_keys'
        constraints = [
            models.UniqueConstraint(
                fields=['item_name_normalized', 'store'],
                name='unique_store_item_key',
            ),
        ]

    def __str__(self):
        return f"{self.item_name_normalized} @ {self.store}"


class PriceObservation(models.Model):
    """A reported price for an item at a store."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    key = models.ForeignKey(
        StoreItemKey,
        on_delete=models.CASCADE,
        related_name='observations'
    )

    item_name = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    store = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    unit = models.CharField(max_length=50, default='item')

    # Start of the reporting window; in-window reports don't move it
    observed_at = models.DateTimeField(default=timezone.now)

    # Verification
    verified = models.BooleanField(default=False)
    report_count = models.PositiveIntegerField(default=1)

    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='price_reports'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'price_observations'
        indexes = [
            models.Index(fields=['item_name', 'store', '-observed_at'], name='price_obser_item_na_3f1c2d_idx'),
            models.Index(fields=['key', '-observed_at'], name='price_obser_key_id_8a4b71_idx'),
            models.Index(fields=['observed_at'], name='price_obser_observe_b27e90_idx'),
        ]
        ordering = ['-observed_at']

    def __str__(self):
        return f"{self.item_name} @ {self.store}: {self.price} / {self.unit}"
