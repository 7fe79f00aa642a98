from django.contrib import admin
from .models import ShoppingList, ShoppingListItem


class ShoppingListItemInline(admin.TabularInline):
    """Inline admin for items within a shopping list."""
    model = ShoppingListItem
    extra = 0
    fields = ['name', 'category', 'estimated_price', 'quantity']


@admin.register(ShoppingList)
class ShoppingListAdmin(admin.ModelAdmin):
    list_display = ['name', 'get_item_count', 'created_at']
    search_fields = ['name', 'notes']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ShoppingListItemInline]
    ordering = ['-created_at']

    def get_item_count(self, obj):
        return obj.items.count()
    get_item_count.short_description = 'Items'


@admin.register(ShoppingListItem)
class ShoppingListItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'shopping_list', 'category', 'estimated_price', 'quantity']
    list_filter = ['category']
    search_fields = ['name', 'shopping_list__name']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('shopping_list')
