"""Bookstore vertical configuration.

Re-exports the BookstoreConfig from the patterns module along with the
read-only pricing constants.
"""

from patterns.domain_config import BookstoreConfig

# Default configuration instance
config = BookstoreConfig.default()

TAX_RATE = config.pricing.tax_rate
SHIPPING_OPTIONS = config.pricing.shipping_options
COUPONS = config.pricing.coupons
