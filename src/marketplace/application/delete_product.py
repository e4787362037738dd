"""Application service: Delete Product use case.

Existing orders keep their line snapshots, so deleting a product never
changes order history.
"""

from __future__ import annotations

import logging

from marketplace.application.lookups import require_product
from marketplace.domain.model.user import User
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, actor: User, product_id: str) -> None:
        product = require_product(self._product_repo, product_id)
        access_policy.ensure_can_manage_product(actor, product)
        self._product_repo.delete(product_id)
        logger.info("Product %s deleted by %s", product_id, actor.id)
