from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('image_url', models.CharField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['is_active', 'name'], name='products_active_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='Coupon',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('code', models.CharField(max_length=50, unique=True)),
                ('discount_percent', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(100)])),
                ('expiry_date', models.DateTimeField()),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'coupons',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['is_active', 'expiry_date'], name='coupons_active_expiry_idx')],
            },
        ),
        migrations.CreateModel(
            name='StoreSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('shipping_fee', models.DecimalField(decimal_places=2, default=Decimal('99'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('free_shipping_threshold', models.DecimalField(decimal_places=2, default=Decimal('999'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('gst_percentage', models.DecimalField(decimal_places=2, default=Decimal('18'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('gst_enabled', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'store_settings',
                'verbose_name': 'Store Settings',
                'verbose_name_plural': 'Store Settings',
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('kind', models.CharField(choices=[('catalog', 'Catalog Order'), ('custom', 'Custom Order')], default='catalog', max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('in_progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('customer_name', models.CharField(max_length=255)),
                ('customer_email', models.EmailField(blank=True, max_length=254)),
                ('customer_phone', models.CharField(max_length=32)),
                ('shipping_address', models.TextField(blank=True)),
                ('payment_channel', models.CharField(choices=[('whatsapp', 'WhatsApp'), ('cod', 'Cash on Delivery'), ('online', 'Online')], default='whatsapp', max_length=50)),
                ('subtotal_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('discount_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('shipping_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('tax_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('coupon_code', models.CharField(blank=True, max_length=50)),
                ('coupon_discount_percent', models.PositiveSmallIntegerField(blank=True, null=True)),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['kind', 'status'], name='orders_kind_status_idx'),
                    models.Index(fields=['created_at'], name='orders_created_at_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('size', models.CharField(blank=True, max_length=50, null=True)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('custom_color', models.CharField(blank=True, max_length=50, null=True)),
                ('custom_image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('custom_back_image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('custom_text', models.TextField(blank=True, null=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='ecommerce.order')),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='ecommerce.product')),
            ],
            options={
                'db_table': 'order_items',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='RankList',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(choices=[('featured', 'Featured Products'), ('hero', 'Hero Carousel')], max_length=50, unique=True)),
            ],
            options={
                'db_table': 'rank_lists',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='RankedEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('position', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rank_entries', to='ecommerce.product')),
                ('rank_list', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entries', to='ecommerce.ranklist')),
            ],
            options={
                'db_table': 'ranked_entries',
                'ordering': ['rank_list', 'position'],
            },
        ),
        migrations.AddConstraint(
            model_name='rankedentry',
            constraint=models.UniqueConstraint(fields=('rank_list', 'product'), name='unique_product_per_rank_list'),
        ),
        migrations.AddConstraint(
            model_name='rankedentry',
            constraint=models.UniqueConstraint(fields=('rank_list', 'position'), name='unique_position_per_rank_list'),
        ),
    ]
