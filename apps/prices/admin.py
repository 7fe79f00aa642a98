from django.contrib import admin
from django.utils.html import format_html
from .models import PriceObservation, StoreItemKey


@admin.register(PriceObservation)
class PriceObservationAdmin(admin.ModelAdmin):
    """
    Admin interface for price observations.

    Observations are written through the price ledger service, so the
    reporting fields are read-only here.
    """

    list_display = [
        'item_name',
        'store',
        'category',
        'price',
        'unit',
        'report_count',
        'verified_badge',
        'observed_at',
    ]

    list_filter = [
        'verified',
        'store',
        'category',
        'observed_at',
    ]

    search_fields = [
        'item_name',
        'store',
        'category',
    ]

    readonly_fields = [
        'key',
        'report_count',
        'verified',
        'reported_by',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'observed_at'
    ordering = ['-observed_at']

    fieldsets = (
        ('Item', {
            'fields': (
                'item_name',
                'category',
                'store',
                'key',
            )
        }),
        ('Price', {
            'fields': (
                'price',
                'unit',
                'observed_at',
            )
        }),
        ('Verification', {
            'fields': (
                'report_count',
                'verified',
                'reported_by',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def verified_badge(self, obj):
        """Display verification state as colored badge."""
        if obj.verified:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Verified</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{} report(s)</span>',
            obj.report_count
        )
    verified_badge.short_description = 'Verified'
    verified_badge.admin_order_field = 'verified'

    def has_add_permission(self, request):
        """Prices are reported through the API so reports get folded."""
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('reported_by', 'key')


@admin.register(StoreItemKey)
class StoreItemKeyAdmin(admin.ModelAdmin):
    list_display = ['item_name_normalized', 'store', 'created_at']
    search_fields = ['item_name_normalized', 'store']
    readonly_fields = ['created_at']
