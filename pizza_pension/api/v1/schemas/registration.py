from pydantic import BaseModel, ConfigDict, constr
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List

PIZZA_MENU: List[str] = [
    "Hawaii",
    "Kebabpizza",
    "Tomaso",
    "La Maffia",
    "Capriciosa",
    "Cacciatora",
    "Vesuvio",
]

# Blank after stripping counts as missing
RequiredText = constr(strip_whitespace=True, min_length=1)


class CamelModel(BaseModel):
    # firstName on the wire, first_name in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegistrationBase(CamelModel):
    first_name: RequiredText
    last_name: RequiredText
    email: RequiredText
    pizza: RequiredText
    drink: RequiredText


# Used for the public submission, unknown keys such as id or createdAt are dropped
class RegistrationCreate(RegistrationBase):
    pass


# Used in responses to the client
class Registration(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    pizza: str
    drink: str
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Pydantic v2 orm_mode equivalent
    )
