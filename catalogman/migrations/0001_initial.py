import django.core.validators
import django.db.models.deletion
import simple_history.models
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="nome")),
                (
                    "supports_addons",
                    models.BooleanField(
                        default=False,
                        help_text="Produtos deste tipo podem ter adicionais (ex: Food)",
                        verbose_name="aceita adicionais",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
            ],
            options={
                "verbose_name": "tipo de produto",
                "verbose_name_plural": "tipos de produto",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="nome")),
                ("description", models.TextField(verbose_name="descrição")),
                (
                    "images",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Lista de URLs; a primeira é a imagem principal",
                        verbose_name="imagens",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="atualizado em")),
                (
                    "product_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="products",
                        to="catalogman.producttype",
                        verbose_name="tipo de produto",
                    ),
                ),
            ],
            options={
                "verbose_name": "produto",
                "verbose_name_plural": "produtos",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Variant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("size", models.CharField(blank=True, max_length=50, null=True, verbose_name="tamanho")),
                ("color", models.CharField(blank=True, max_length=50, null=True, verbose_name="cor")),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="preço",
                    ),
                ),
                ("stock", models.PositiveIntegerField(default=0, verbose_name="estoque")),
                ("sku", models.CharField(max_length=100, unique=True, verbose_name="SKU")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="atualizado em")),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variants",
                        to="catalogman.product",
                        verbose_name="produto",
                    ),
                ),
            ],
            options={
                "verbose_name": "variante",
                "verbose_name_plural": "variantes",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Addon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="nome")),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="preço",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addons",
                        to="catalogman.product",
                        verbose_name="produto",
                    ),
                ),
            ],
            options={
                "verbose_name": "adicional",
                "verbose_name_plural": "adicionais",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalProduct",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="nome")),
                ("description", models.TextField(verbose_name="descrição")),
                (
                    "images",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Lista de URLs; a primeira é a imagem principal",
                        verbose_name="imagens",
                    ),
                ),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="criado em")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="atualizado em")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product_type",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="catalogman.producttype",
                        verbose_name="tipo de produto",
                    ),
                ),
            ],
            options={
                "verbose_name": "historical produto",
                "verbose_name_plural": "historical produtos",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="HistoricalVariant",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("size", models.CharField(blank=True, max_length=50, null=True, verbose_name="tamanho")),
                ("color", models.CharField(blank=True, max_length=50, null=True, verbose_name="cor")),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="preço",
                    ),
                ),
                ("stock", models.PositiveIntegerField(default=0, verbose_name="estoque")),
                ("sku", models.CharField(db_index=True, max_length=100, verbose_name="SKU")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="criado em")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="atualizado em")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="catalogman.product",
                        verbose_name="produto",
                    ),
                ),
            ],
            options={
                "verbose_name": "historical variante",
                "verbose_name_plural": "historical variantes",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
