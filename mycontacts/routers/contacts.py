# mycontacts/routers/contacts.py
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from mycontacts.core.auth import require_auth
from mycontacts.core.security import Identity
from mycontacts.database import get_session
from mycontacts.repositories.contact_repo import ContactRepository
from mycontacts.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from mycontacts.services.contact_service import ContactService

router = APIRouter(prefix="/contacts", tags=["Contacts"])

repo = ContactRepository()
service = ContactService(repo)


@router.get("", response_model=list[ContactRead])
def list_contacts(
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_auth),
):
    """
    List the authenticated user's contacts.
    """
    return service.list_contacts(session, identity.user_id)


@router.post(
    "",
    response_model=ContactRead,
    status_code=status.HTTP_201_CREATED,
)
def create_contact(
    payload: ContactCreate,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_auth),
):
    """
    Create a contact owned by the authenticated user.

    - 400 on missing fields or invalid phone.
    - 409 if the user already has a contact with this phone.
    """
    return service.create_contact(session, identity.user_id, payload)


@router.patch("/{contact_id}", response_model=ContactRead)
def update_contact(
    contact_id: uuid.UUID,
    payload: ContactUpdate,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_auth),
):
    """
    Partially update one of the user's contacts.

    Contacts owned by someone else are reported as 404.
    """
    return service.update_contact(session, contact_id, identity.user_id, payload)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(
    contact_id: uuid.UUID,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_auth),
):
    """
    Delete one of the user's contacts.
    """
    service.delete_contact(session, contact_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
