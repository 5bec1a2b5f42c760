"""ProductType model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ProductType(models.Model):
    """
    Top-level category used for grouping and for add-on eligibility.

    supports_addons is fixed when the type is created; products of a type
    without the capability can never receive add-ons.
    """

    name = models.CharField(_("nome"), max_length=100, unique=True)
    supports_addons = models.BooleanField(
        _("aceita adicionais"),
        default=False,
        help_text=_("Produtos deste tipo podem ter adicionais (ex: Food)"),
    )

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)

    class Meta:
        verbose_name = _("tipo de produto")
        verbose_name_plural = _("tipos de produto")
        ordering = ["id"]

    def __str__(self):
        return self.name
