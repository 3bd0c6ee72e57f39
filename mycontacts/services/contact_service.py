# mycontacts/services/contact_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from mycontacts.core.errors import ConflictError, InvalidInputError, NotFoundError
from mycontacts.models.contact import Contact
from mycontacts.repositories.contact_repo import ContactRepository
from mycontacts.schemas.contact import ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)

PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 20

INVALID_PHONE = f"phone must be {PHONE_MIN_LENGTH}-{PHONE_MAX_LENGTH} digits"
DUPLICATE_PHONE = "A contact with this phone already exists"
CONTACT_NOT_FOUND = "Contact not found"


def is_valid_phone(phone: str | None) -> bool:
    """
    Phone rule: after trimming whitespace, 10-20 characters, ASCII digits only.
    """
    if not isinstance(phone, str):
        return False
    value = phone.strip()
    return (
        PHONE_MIN_LENGTH <= len(value) <= PHONE_MAX_LENGTH
        and value.isascii()
        and value.isdigit()
    )


class ContactService:
    """
    Business logic for contacts.

    Responsibilities:
      - validate names and phone numbers
      - enforce per-owner phone uniqueness (pre-check + unique constraint)
      - scope every read/write to the authenticated owner; contacts of other
        owners are reported as 404, same as missing ones
    """

    def __init__(self, repo: ContactRepository):
        self.repo = repo

    # ---- internal helpers ----

    @staticmethod
    def _require_owner(owner_id: uuid.UUID | None) -> None:
        if owner_id is None:
            raise InvalidInputError("ownerId is required")

    @staticmethod
    def _clean_name(value: str, field: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidInputError(f"{field} cannot be empty")
        return value

    def _ensure_phone_free(
        self,
        session: Session,
        owner_id: uuid.UUID,
        phone: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        existing = self.repo.get_by_phone(session, owner_id, phone)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(DUPLICATE_PHONE)

    def _persist(self, session: Session, contact: Contact, create: bool) -> Contact:
        try:
            if create:
                return self.repo.create(session, contact)
            return self.repo.update(session, contact)
        except IntegrityError:
            # The unique (owner_id, phone) constraint caught a concurrent write.
            session.rollback()
            raise ConflictError(DUPLICATE_PHONE)

    # ---- public operations ----

    def list_contacts(self, session: Session, owner_id: uuid.UUID) -> list[Contact]:
        """Return every contact of `owner_id` in store order (may be empty)."""
        return self.repo.list_for_owner(session, owner_id)

    def create_contact(
        self,
        session: Session,
        owner_id: uuid.UUID | None,
        payload: ContactCreate,
    ) -> Contact:
        """
        Create a contact for `owner_id`.

        Rules:
          - firstName, lastName and phone are required (400)
          - phone must pass `is_valid_phone` (400)
          - phone must be unique among the owner's contacts (409)
        """
        self._require_owner(owner_id)

        if not payload.first_name or not payload.last_name or not payload.phone:
            raise InvalidInputError("firstName, lastName and phone are required")

        if not is_valid_phone(payload.phone):
            raise InvalidInputError(INVALID_PHONE)

        phone = payload.phone.strip()
        self._ensure_phone_free(session, owner_id, phone)

        contact = Contact(
            owner_id=owner_id,
            first_name=self._clean_name(payload.first_name, "firstName"),
            last_name=self._clean_name(payload.last_name, "lastName"),
            phone=phone,
        )
        contact = self._persist(session, contact, create=True)
        logger.info(f"Created contact {contact.id} for user {owner_id}")
        return contact

    def update_contact(
        self,
        session: Session,
        contact_id: uuid.UUID,
        owner_id: uuid.UUID | None,
        payload: ContactUpdate,
    ) -> Contact:
        """
        Partial update of an owned contact.

        Only fields present (and not null) in the payload are applied.
        owner_id is not part of ContactUpdate, so it cannot change.
        """
        self._require_owner(owner_id)

        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None
        }
        if not changes:
            raise InvalidInputError("Request body is required")

        if "phone" in changes:
            if not is_valid_phone(changes["phone"]):
                raise InvalidInputError(INVALID_PHONE)
            changes["phone"] = changes["phone"].strip()
        if "first_name" in changes:
            changes["first_name"] = self._clean_name(changes["first_name"], "firstName")
        if "last_name" in changes:
            changes["last_name"] = self._clean_name(changes["last_name"], "lastName")

        contact = self.repo.get_owned(session, contact_id, owner_id)
        if contact is None:
            raise NotFoundError(CONTACT_NOT_FOUND)

        if "phone" in changes:
            self._ensure_phone_free(session, owner_id, changes["phone"], exclude_id=contact.id)

        for field, value in changes.items():
            setattr(contact, field, value)

        contact = self._persist(session, contact, create=False)
        logger.info(f"Updated contact {contact.id} for user {owner_id}")
        return contact

    def delete_contact(
        self,
        session: Session,
        contact_id: uuid.UUID,
        owner_id: uuid.UUID | None,
    ) -> None:
        """Delete an owned contact; 404 when it is missing or not owned."""
        self._require_owner(owner_id)

        contact = self.repo.get_owned(session, contact_id, owner_id)
        if contact is None:
            raise NotFoundError(CONTACT_NOT_FOUND)

        self.repo.delete(session, contact)
        logger.info(f"Deleted contact {contact_id} for user {owner_id}")
