"""Variant and Addon models."""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords


class Variant(models.Model):
    """Purchasable configuration of a product (size/color/price/stock)."""

    product = models.ForeignKey(
        "catalogman.Product",
        on_delete=models.CASCADE,
        related_name="variants",
        verbose_name=_("produto"),
    )
    size = models.CharField(_("tamanho"), max_length=50, null=True, blank=True)
    color = models.CharField(_("cor"), max_length=50, null=True, blank=True)
    price = models.DecimalField(
        _("preço"),
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    stock = models.PositiveIntegerField(_("estoque"), default=0)
    sku = models.CharField(_("SKU"), max_length=100, unique=True)

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)
    updated_at = models.DateTimeField(_("atualizado em"), auto_now=True)

    # History tracking (price and stock audit)
    history = HistoricalRecords()

    class Meta:
        verbose_name = _("variante")
        verbose_name_plural = _("variantes")
        ordering = ["id"]

    def __str__(self):
        return f"{self.sku} - {self.label}"

    def save(self, *args, **kwargs):
        old_price = None
        if not self._state.adding and self.price is not None:
            old = Variant.objects.filter(pk=self.pk).values_list("price", flat=True).first()
            if old is not None and old != Decimal(str(self.price)):
                old_price = old
        self.full_clean()
        super().save(*args, **kwargs)
        if old_price is not None:
            from catalogman.signals import price_changed

            price_changed.send(
                sender=self.__class__,
                instance=self,
                sku=self.sku,
                old_price=old_price,
                new_price=self.price,
            )

    @property
    def label(self) -> str:
        """Short label for selection lists: 'Regular · Red', '— · Blue', 'M'."""
        label = self.size or "—"
        if self.color:
            label = f"{label} · {self.color}"
        return label

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0


class Addon(models.Model):
    """Optional priced extra for products whose type supports add-ons."""

    product = models.ForeignKey(
        "catalogman.Product",
        on_delete=models.CASCADE,
        related_name="addons",
        verbose_name=_("produto"),
    )
    name = models.CharField(_("nome"), max_length=100)
    price = models.DecimalField(
        _("preço"),
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)

    class Meta:
        verbose_name = _("adicional")
        verbose_name_plural = _("adicionais")
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} (+{self.price})"

    def clean(self):
        """Validation: the product's type must support add-ons."""
        product = getattr(self, "product", None)
        if product is not None and not product.supports_addons:
            raise ValidationError(
                f"Add-ons are not allowed for {product.product_type.name} products"
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)
