from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class ShoppingList(models.Model):
    """A named shopping list (one per budget plan or trip)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shopping_lists'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class ShoppingListItem(models.Model):
    """An item to buy, with the shopper's own price estimate."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    shopping_list = models.ForeignKey(
        ShoppingList,
        on_delete=models.CASCADE,
        related_name='items'
    )

    name = models.CharField(max_length=200)
    category = models.CharField(max_length=100, blank=True)
    estimated_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shopping_list_items'
        indexes = [
            models.Index(fields=['shopping_list', 'created_at'], name='shopping_li_shoppin_5c1e0a_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def total_estimated_price(self):
        if self.estimated_price is None:
            return None
        return self.estimated_price * self.quantity
