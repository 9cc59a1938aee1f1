# catalog_api/repositories/combo_repo.py
import uuid

from sqlmodel import Session, select

from catalog_api.models.combo import Combo


class ComboRepository:
    """
    Data access layer for Combo.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, combo_id: uuid.UUID) -> Combo | None:
        """Return a Combo by primary key, or None if not found."""
        return session.get(Combo, combo_id)

    def list(self, session: Session) -> list[Combo]:
        """All combos, newest first."""
        stmt = select(Combo).order_by(Combo.created_at.desc())
        return list(session.exec(stmt).all())

    def create(self, session: Session, combo: Combo) -> Combo:
        """Insert a new Combo and return the persisted row."""
        session.add(combo)
        session.commit()
        session.refresh(combo)
        return combo

    def update(self, session: Session, combo: Combo) -> Combo:
        """Persist changes to an existing Combo."""
        session.add(combo)
        session.commit()
        session.refresh(combo)
        return combo

    def delete(self, session: Session, combo: Combo) -> None:
        """Delete a Combo."""
        session.delete(combo)
        session.commit()
