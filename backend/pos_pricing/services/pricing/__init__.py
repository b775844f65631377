"""Cart pricing engine: allocation calculator and reconciliation controller."""

from pos_pricing.services.pricing.allocation import (
    AllocatedLine,
    CartLine,
    PricingInput,
    PricingResult,
    allocation_drift,
    calculate,
    calculate_input,
    quote_line,
    requote_lines,
)
from pos_pricing.services.pricing.errors import (
    InvalidCartError,
    PricingError,
    ProductUnavailableError,
)
from pos_pricing.services.pricing.lookup import (
    InMemoryPriceTable,
    PriceLookup,
    ProductQuote,
)
from pos_pricing.services.pricing.reconciliation import (
    EditState,
    PricingSnapshot,
    ReconciliationController,
)
from pos_pricing.services.pricing.scheduler import RecalculationScheduler

__all__ = [
    "AllocatedLine",
    "CartLine",
    "EditState",
    "InMemoryPriceTable",
    "InvalidCartError",
    "PriceLookup",
    "PricingError",
    "PricingInput",
    "PricingResult",
    "PricingSnapshot",
    "ProductQuote",
    "ProductUnavailableError",
    "RecalculationScheduler",
    "ReconciliationController",
    "allocation_drift",
    "calculate",
    "calculate_input",
    "quote_line",
    "requote_lines",
]
