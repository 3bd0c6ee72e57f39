# mycontacts/repositories/contact_repo.py
import uuid

from sqlmodel import Session, select

from mycontacts.models.contact import Contact


class ContactRepository:
    """
    Data access layer for Contact.

    Every lookup that can lead to a mutation is scoped by owner_id.
    """

    def list_for_owner(self, session: Session, owner_id: uuid.UUID) -> list[Contact]:
        stmt = select(Contact).where(Contact.owner_id == owner_id)
        return list(session.exec(stmt).all())

    def get_owned(
        self, session: Session, contact_id: uuid.UUID, owner_id: uuid.UUID
    ) -> Contact | None:
        """Return the contact only if it belongs to `owner_id`."""
        stmt = select(Contact).where(
            Contact.id == contact_id, Contact.owner_id == owner_id
        )
        return session.exec(stmt).first()

    def get_by_phone(
        self, session: Session, owner_id: uuid.UUID, phone: str
    ) -> Contact | None:
        stmt = select(Contact).where(
            Contact.owner_id == owner_id, Contact.phone == phone
        )
        return session.exec(stmt).first()

    # CRUD
    def create(self, session: Session, contact: Contact) -> Contact:
        session.add(contact)
        session.commit()
        session.refresh(contact)
        return contact

    def update(self, session: Session, contact: Contact) -> Contact:
        session.add(contact)
        session.commit()
        session.refresh(contact)
        return contact

    def delete(self, session: Session, contact: Contact) -> None:
        session.delete(contact)
        session.commit()
