from rest_framework import serializers
from .models import ShoppingList, ShoppingListItem


class ShoppingListItemSerializer(serializers.ModelSerializer):
    """Serializer for shopping list items."""

    total_estimated_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        read_only=True,
        allow_null=True
    )

    class Meta:
        model = ShoppingListItem
        fields = [
            'id',
            'shopping_list',
            'name',
            'category',
            'estimated_price',
            'quantity',
            'total_estimated_price',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Item name cannot be blank')
        return value

    def validate_quantity(self, value):
        if value < 1:
            raise serializers.ValidationError('Quantity must be at least 1')
        return value


class ShoppingListSerializer(serializers.ModelSerializer):
    """Main serializer for shopping lists, with their items."""

    items = ShoppingListItemSerializer(many=True, read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = ShoppingList
        fields = [
            'id',
            'name',
            'notes',
            'item_count',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_item_count(self, obj):
        return len(obj.items.all())


class ShoppingListListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = ShoppingList
        fields = ['id', 'name', 'item_count', 'created_at']
        read_only_fields = fields
