"""Persistence layer for merchants."""

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import Merchant
from sjfulfillment.infrastructure.models import MerchantModel
from sjfulfillment.utils import ensure_app_timezone


class MerchantRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, merchant_id: int) -> Merchant | None:
        model = self.session.get(MerchantModel, merchant_id)
        return self._to_entity(model) if model else None

    def create(self, merchant: Merchant) -> Merchant:
        model = MerchantModel(
            business_name=merchant.business_name,
            is_active=merchant.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: MerchantModel) -> Merchant:
        return Merchant(
            id=model.id,
            business_name=model.business_name,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["MerchantRepository"]
