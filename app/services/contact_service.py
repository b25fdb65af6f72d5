import logging
from typing import Any, Optional

from app.core.config import Settings
from app.core.exceptions import (
    DeliveryError,
    PersistenceError,
    PersistenceUnavailable,
    PortfolioError,
)
from app.database.mongodb import ContactStore
from app.models.contact import ContactInDB, utc_now
from app.services.email_service import EmailService, build_auto_reply, build_owner_notification
from app.utils.validators import validate_contact_fields

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully! Thank you for reaching out."
FETCH_FAILED_MESSAGE = "Failed to fetch contacts"


class ContactService:
    """
    Handles one contact-form submission: validate, optionally store, then
    notify the owner and auto-reply to the sender.

    The store and mailer are passed in so each app (and each test) decides
    what backs them. Calls are not idempotent: every successful call stores
    a new record and sends two emails.
    """

    def __init__(self, settings: Settings, mailer: EmailService, store: Optional[ContactStore] = None):
        self.settings = settings
        self.mailer = mailer
        self.store = store

    @property
    def store_connected(self) -> bool:
        return self.store is not None and self.store.connected

    async def submit(self, payload: Any) -> str:
        contact = validate_contact_fields(payload)

        if self.store_connected:
            await self._persist(contact)

        await self._deliver(contact)

        logger.info("📧 Emails sent successfully")
        return SUCCESS_MESSAGE

    async def _persist(self, contact: dict):
        record = ContactInDB(**contact).model_dump(by_alias=True)
        try:
            contact_id = await self.store.insert_contact(record)
        except Exception as e:
            if self.settings.PERSISTENCE_FAILURE_POLICY == "best_effort":
                logger.warning(f"⚠️ Could not save message, sending emails anyway: {e}")
                return
            logger.error(f"❌ Failed to save contact message: {e}")
            raise PersistenceError() from e

        logger.info(f"💾 Message saved to database ({contact_id})")

    async def _deliver(self, contact: dict):
        # Owner first; the auto-reply is only attempted once that succeeded
        messages = [
            build_owner_notification(contact, self.settings.recipient or "", utc_now()),
            build_auto_reply(contact, self.settings.OWNER_NAME),
        ]
        for message in messages:
            try:
                await self.mailer.send(message)
            except Exception as e:
                logger.error(f"❌ Contact form error: failed to send '{message.subject}' to {message.to}: {e}")
                raise DeliveryError() from e

    async def list_contacts(self) -> list:
        if not self.store_connected:
            raise PersistenceUnavailable()

        try:
            contacts = await self.store.list_contacts()
        except Exception as e:
            logger.error(f"❌ Error fetching contacts: {e}")
            raise PortfolioError(FETCH_FAILED_MESSAGE) from e

        # Listed as stored, only _id is stringified by the store
        return contacts
