import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StoreItemKey',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('item_name_normalized', models.CharField(max_length=200)),
                ('store', models.CharField(max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'store_item_keys',
                'constraints': [models.UniqueConstraint(fields=('item_name_normalized', 'store'), name='unique_store_item_key')],
            },
        ),
        migrations.CreateModel(
            name='PriceObservation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('item_name', models.CharField(max_length=200)),
                ('category', models.CharField(max_length=100)),
                ('store', models.CharField(max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('unit', models.CharField(default='item', max_length=50)),
                ('observed_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('verified', models.BooleanField(default=False)),
                ('report_count', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('key', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='observations', to='prices.storeitemkey')),
                ('reported_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='price_reports', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'price_observations',
                'ordering': ['-observed_at'],
                'indexes': [
                    models.Index(fields=['item_name', 'store', '-observed_at'], name='price_obser_item_na_3f1c2d_idx'),
                    models.Index(fields=['key', '-observed_at'], name='price_obser_key_id_8a4b71_idx'),
                    models.Index(fields=['observed_at'], name='price_obser_observe_b27e90_idx'),
                ],
            },
        ),
    ]
