"""Checkout customizations bounded context: delivery titles and shipping discounts.

Holds the two checkout functions that run on every checkout evaluation: the
delivery title rewriter and the shipping discount evaluator. Both are pure
transforms over a cart snapshot and a merchant-authored configuration blob.
"""

import structlog
from protean.domain import Domain

customizations = Domain(name="customizations")

logger = structlog.get_logger(__name__)
