"""
Catalogman signals.

Signals:
    product_created:
        Sent after a new Product is saved for the first time.

        Kwargs:
            sender: Product class
            instance: The Product instance that was created
            product_id (int): the product id

    product_deleted:
        Sent by CatalogService.delete_product() after the product, its
        variants and its add-ons were removed.

        Kwargs:
            sender: Product class
            instance: The deleted Product instance (pk already cleared)
            product_id (int): the id the product had

        Example handler::

            from catalogman.signals import product_deleted

            def on_product_deleted(sender, instance, product_id, **kwargs):
                logger.info("Product %s removed", product_id)

            product_deleted.connect(on_product_deleted)

    price_changed:
        Sent after a Variant's price changes.

        Kwargs:
            sender: Variant class
            instance: The Variant instance
            sku (str): the variant SKU
            old_price (Decimal): previous price
            new_price (Decimal): new price
"""

from django.dispatch import Signal

product_created = Signal()
product_deleted = Signal()
price_changed = Signal()
