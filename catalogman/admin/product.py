"""Product admin."""

from django.contrib import admin
from django.utils.html import format_html

from catalogman.models import Addon, Product, ProductType, Variant


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 1
    fields = ["sku", "size", "color", "price", "stock"]


class AddonInline(admin.TabularInline):
    model = Addon
    extra = 1
    fields = ["name", "price"]

    def has_add_permission(self, request, obj=None):
        """Add-ons only for saved products whose type supports them."""
        if obj is None or not obj.supports_addons:
            return False
        return super().has_add_permission(request, obj)


@admin.register(ProductType)
class ProductTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "supports_addons", "products_count"]
    list_filter = ["supports_addons"]
    search_fields = ["name"]

    def get_readonly_fields(self, request, obj=None):
        # Add-on capability is fixed at creation.
        if obj is not None:
            return ["supports_addons"]
        return []

    def products_count(self, obj):
        return obj.products.count()

    products_count.short_description = "Products"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "product_type",
        "variants_count",
        "stock_status",
    ]
    list_filter = ["product_type"]
    search_fields = ["name", "variants__sku"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [VariantInline, AddonInline]

    fieldsets = [
        (None, {"fields": ("name", "description", "product_type", "images")}),
        (
            "Metadata",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    ]

    def get_readonly_fields(self, request, obj=None):
        # Product type is fixed at creation.
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            readonly.append("product_type")
        return readonly

    def get_queryset(self, request):
        return super().get_queryset(request).with_details()

    def variants_count(self, obj):
        return len(obj.variants.all())

    variants_count.short_description = "Variants"

    def stock_status(self, obj):
        """Green badge when any variant is in stock, red otherwise."""
        if any(variant.is_in_stock for variant in obj.variants.all()):
            return format_html(
                '<span style="background-color:#28a745;color:#fff;'
                'padding:2px 6px;border-radius:3px;font-size:11px;">In stock</span>'
            )
        return format_html(
            '<span style="background-color:#dc3545;color:#fff;'
            'padding:2px 6px;border-radius:3px;font-size:11px;">Out of stock</span>'
        )

    stock_status.short_description = "Stock"
