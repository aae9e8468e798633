# pizza_pension/api/v1/validators/registration.py
from typing import Any, List

from pydantic import ValidationError

from pizza_pension.api.v1.schemas.registration import PIZZA_MENU, RegistrationCreate
from pizza_pension.core.errors import RegistrationValidationError

# pydantic error types that all mean "nothing usable was sent"
_MISSING_TYPES = {"missing", "string_too_short"}


def _field_errors(exc: ValidationError) -> List[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc) if loc else None
        message = "Field required" if err["type"] in _MISSING_TYPES else err["msg"]
        errors.append({"field": field, "message": message})
    return errors


def validate_registration(data: Any) -> RegistrationCreate:
    """
    Validate a raw submission and return the normalized record.

    Only presence and type are checked here. Raises RegistrationValidationError
    with one entry per offending field.
    """
    if not isinstance(data, dict):
        raise RegistrationValidationError(
            [{"field": None, "message": "Expected an object with the registration fields"}]
        )
    try:
        return RegistrationCreate.model_validate(data)
    except ValidationError as e:
        raise RegistrationValidationError(_field_errors(e))


def ensure_pizza_on_menu(pizza: str) -> None:
    """
    Reject pizzas that are not on the fixed menu.
    """
    if pizza not in PIZZA_MENU:
        raise RegistrationValidationError(
            [{"field": "pizza", "message": f"Pizza must be one of: {', '.join(PIZZA_MENU)}"}]
        )
