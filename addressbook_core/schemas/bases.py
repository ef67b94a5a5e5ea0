"""
Address book schemas for persons and their phone numbers
"""

import enum
from typing import List, Optional

import pydantic


__all__ = ["PhoneType", "PhoneNumber", "Person", "PersonCreation", "PersonUpdate"]


@enum.unique
class PhoneType(str, enum.Enum):
    MOBILE = "mobile"
    HOME = "home"
    WORK = "work"


class PhoneNumber(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    number: str
    type: PhoneType = PhoneType.HOME


class Person(pydantic.BaseModel):
    """
    Person: a single entry of the address book

    Instances are immutable. The store replaces a person as a whole
    on updates, so readers never see a half-updated entry. Two persons
    are equal if and only if all their fields are equal, including
    the order of the phone numbers, the ``id`` and the ``href``.
    """

    model_config = pydantic.ConfigDict(frozen=True, populate_by_name=True)

    id: pydantic.NonNegativeInt
    name: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: List[PhoneNumber] = pydantic.Field(default_factory=list, alias="phoneNumbers")
    href: Optional[str] = None

    @property
    def has_email(self) -> bool:
        return self.email is not None


class PersonCreation(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: List[PhoneNumber] = pydantic.Field(default_factory=list, alias="phoneNumbers")


class PersonUpdate(PersonCreation):
    pass
