"""Unit tests for ContactService validation and ownership rules."""

import uuid

import pytest

from mycontacts.core.errors import ConflictError, InvalidInputError, NotFoundError
from mycontacts.repositories.contact_repo import ContactRepository
from mycontacts.schemas.contact import ContactCreate, ContactUpdate
from mycontacts.services.contact_service import ContactService, is_valid_phone


@pytest.fixture
def service():
    return ContactService(ContactRepository())


@pytest.fixture
def owner():
    return uuid.uuid4()


def make(first="Ada", last="Lovelace", phone="5551234567"):
    return ContactCreate(first_name=first, last_name=last, phone=phone)


class TestPhoneRule:
    @pytest.mark.parametrize(
        "phone,valid",
        [
            ("1234567890", True),
            ("12345678901234567890", True),
            ("  1234567890  ", True),
            ("123", False),
            ("123456789012345678901", False),
            ("12345abcde", False),
            ("+1234567890", False),
            ("123 456 7890", False),
            ("١٢٣٤٥٦٧٨٩٠", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_valid_phone(self, phone, valid):
        assert is_valid_phone(phone) is valid


class TestCreate:
    def test_create_and_list(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        assert contact.owner_id == owner
        assert contact.first_name == "Ada"
        assert [c.id for c in service.list_contacts(session, owner)] == [contact.id]

    def test_list_is_empty_for_new_owner(self, service, session, owner):
        assert service.list_contacts(session, owner) == []

    def test_missing_owner(self, service, session):
        with pytest.raises(InvalidInputError):
            service.create_contact(session, None, make())

    @pytest.mark.parametrize("field", ["first_name", "last_name", "phone"])
    def test_missing_field(self, service, session, owner, field):
        payload = make().model_copy(update={field: None})

        with pytest.raises(InvalidInputError):
            service.create_contact(session, owner, payload)

    def test_blank_name(self, service, session, owner):
        with pytest.raises(InvalidInputError):
            service.create_contact(session, owner, make(first="   "))

    def test_invalid_phone(self, service, session, owner):
        with pytest.raises(InvalidInputError):
            service.create_contact(session, owner, make(phone="12345abcde"))

    def test_phone_is_stored_trimmed(self, service, session, owner):
        contact = service.create_contact(session, owner, make(phone=" 5551234567 "))

        assert contact.phone == "5551234567"

    def test_same_phone_same_owner_conflicts(self, service, session, owner):
        service.create_contact(session, owner, make())

        with pytest.raises(ConflictError):
            service.create_contact(session, owner, make(first="Other"))

    def test_same_phone_different_owners_is_fine(self, service, session):
        a = service.create_contact(session, uuid.uuid4(), make())
        b = service.create_contact(session, uuid.uuid4(), make())

        assert a.id != b.id

    def test_unique_constraint_backs_the_precheck(self, service, session, owner, monkeypatch):
        service.create_contact(session, owner, make())
        monkeypatch.setattr(service, "_ensure_phone_free", lambda *a, **kw: None)

        with pytest.raises(ConflictError):
            service.create_contact(session, owner, make())


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        updated = service.update_contact(
            session, contact.id, owner, ContactUpdate(last_name="Byron")
        )

        assert updated.last_name == "Byron"
        assert updated.first_name == "Ada"
        assert updated.phone == "5551234567"

    def test_owner_cannot_be_changed(self, service, session, owner):
        contact = service.create_contact(session, owner, make())
        payload = ContactUpdate.model_validate({"ownerId": str(uuid.uuid4()), "firstName": "Bo"})

        updated = service.update_contact(session, contact.id, owner, payload)

        assert updated.owner_id == owner
        assert updated.first_name == "Bo"

    def test_other_owner_gets_not_found_and_record_is_unchanged(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        with pytest.raises(NotFoundError):
            service.update_contact(session, contact.id, uuid.uuid4(), ContactUpdate(first_name="X"))

        assert service.list_contacts(session, owner)[0].first_name == "Ada"

    def test_unknown_id_is_not_found(self, service, session, owner):
        with pytest.raises(NotFoundError):
            service.update_contact(session, uuid.uuid4(), owner, ContactUpdate(first_name="X"))

    def test_invalid_phone(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        with pytest.raises(InvalidInputError):
            service.update_contact(session, contact.id, owner, ContactUpdate(phone="123"))

    def test_phone_taken_by_another_contact_conflicts(self, service, session, owner):
        service.create_contact(session, owner, make(phone="1111111111"))
        second = service.create_contact(session, owner, make(phone="2222222222"))

        with pytest.raises(ConflictError):
            service.update_contact(session, second.id, owner, ContactUpdate(phone="1111111111"))

    def test_keeping_own_phone_is_not_a_conflict(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        updated = service.update_contact(session, contact.id, owner, ContactUpdate(phone="5551234567"))

        assert updated.phone == "5551234567"

    def test_empty_update_is_rejected(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        with pytest.raises(InvalidInputError):
            service.update_contact(session, contact.id, owner, ContactUpdate())

    def test_missing_owner(self, service, session):
        with pytest.raises(InvalidInputError):
            service.update_contact(session, uuid.uuid4(), None, ContactUpdate(first_name="X"))


class TestDelete:
    def test_delete_owned(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        service.delete_contact(session, contact.id, owner)

        assert service.list_contacts(session, owner) == []

    def test_other_owner_gets_not_found(self, service, session, owner):
        contact = service.create_contact(session, owner, make())

        with pytest.raises(NotFoundError):
            service.delete_contact(session, contact.id, uuid.uuid4())

        assert len(service.list_contacts(session, owner)) == 1

    def test_missing_owner(self, service, session):
        with pytest.raises(InvalidInputError):
            service.delete_contact(session, uuid.uuid4(), None)
