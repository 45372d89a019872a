"""Persistence layer for roles data."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import Role
from sjfulfillment.infrastructure.models import RoleModel


class RoleRepository:
    """Provide access to roles stored in the database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.upper(RoleModel.alias) == alias.upper())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_or_create(self, *, alias: str, name: str) -> Role:
        """Return the role with ``alias``, inserting it when missing."""

        existing = self.get_by_alias(alias)
        if existing is not None:
            return existing
        model = RoleModel(alias=alias, name=name)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
