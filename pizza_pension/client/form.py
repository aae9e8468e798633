from typing import Dict, Optional

from loguru import logger

from pizza_pension.api.v1.schemas.registration import PIZZA_MENU, Registration
from pizza_pension.client.api import ApiError, PizzaPensionClient
from pizza_pension.core.config import EVENT_CAPACITY

FORM_FIELDS = ("firstName", "lastName", "email", "pizza", "drink")

SUCCESS_TITLE = "Registrering mottagen!"
SUCCESS_DESCRIPTION = "Tack för din anmälan till Pizza & Pension."


def capacity_notice(capacity: int = EVENT_CAPACITY) -> str:
    # Informational only, registrations past capacity are still accepted
    return f"Begränsat till {capacity} deltagare - först till kvarn!"


class RegistrationForm:
    """
    The attendee sign-up form.

    Mirrors the server's presence/type checks locally so mistakes show up
    before anything is sent, and additionally requires a pizza from the menu.
    """

    def __init__(self, **values: str):
        self.values: Dict[str, str] = {field: "" for field in FORM_FIELDS}
        self.values.update({k: v for k, v in values.items() if k in FORM_FIELDS})
        self.errors: Dict[str, str] = {}
        self.confirmation: Optional[str] = None
        self.error_message: Optional[str] = None

    def set(self, field: str, value: str) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(field)
        self.values[field] = value

    def validate(self) -> Dict[str, str]:
        errors = {}
        for field in FORM_FIELDS:
            value = self.values.get(field)
            if not isinstance(value, str):
                errors[field] = "Input should be a valid string"
            elif not value.strip():
                errors[field] = "Field required"
        if "pizza" not in errors and self.values["pizza"] not in PIZZA_MENU:
            errors["pizza"] = f"Pizza must be one of: {', '.join(PIZZA_MENU)}"
        self.errors = errors
        return errors

    def reset(self) -> None:
        self.values = {field: "" for field in FORM_FIELDS}
        self.errors = {}

    async def submit(self, client: PizzaPensionClient) -> Optional[Registration]:
        """
        Validate and send the form. On success the fields are cleared and a
        confirmation is set; on failure the server's message is kept in
        error_message and the values stay for a manual retry.
        """
        self.confirmation = None
        self.error_message = None
        if self.validate():
            return None

        try:
            registration = await client.register(dict(self.values))
        except ApiError as e:
            logger.info(f"Registration rejected by server: {e.message}")
            self.error_message = e.message
            return None

        self.reset()
        self.confirmation = f"{SUCCESS_TITLE} {SUCCESS_DESCRIPTION}"
        return registration
