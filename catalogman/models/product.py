"""Product model."""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords


class ProductQuerySet(models.QuerySet):
    """Custom QuerySet for Product with catalog helpers."""

    def with_details(self):
        """Products with type, variants and add-ons loaded."""
        return self.select_related("product_type").prefetch_related("variants", "addons")


class Product(models.Model):
    """Sellable product, owner of its variants and add-ons."""

    name = models.CharField(_("nome"), max_length=200)
    description = models.TextField(_("descrição"))
    images = models.JSONField(
        _("imagens"),
        default=list,
        blank=True,
        help_text=_("Lista de URLs; a primeira é a imagem principal"),
    )
    product_type = models.ForeignKey(
        "catalogman.ProductType",
        on_delete=models.PROTECT,
        related_name="products",
        verbose_name=_("tipo de produto"),
    )

    # Audit
    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)
    updated_at = models.DateTimeField(_("atualizado em"), auto_now=True)

    # History tracking
    history = HistoricalRecords()

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _("produto")
        verbose_name_plural = _("produtos")
        ordering = ["id"]

    def __str__(self):
        return self.name

    def clean(self):
        """Images must be a list of strings."""
        if not isinstance(self.images, (list, tuple)):
            raise ValidationError({"images": "Images must be a list."})
        if not all(isinstance(image, str) for image in self.images):
            raise ValidationError({"images": "Every image must be a string."})

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        self.full_clean()
        super().save(*args, **kwargs)
        if is_new:
            from catalogman.signals import product_created

            product_created.send(sender=self.__class__, instance=self, product_id=self.pk)

    @property
    def display_image(self) -> str:
        """First image, or the configured placeholder when there is none."""
        if self.images:
            return self.images[0]
        from catalogman.conf import catalogman_settings

        return catalogman_settings.PLACEHOLDER_IMAGE

    @property
    def default_variant(self):
        """Variant pre-selected when the product is opened (lowest id)."""
        return next(iter(self.variants.all()), None)

    @property
    def supports_addons(self) -> bool:
        return self.product_type.supports_addons
