"""Shared fixtures and record types for structval tests."""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field

from structval import Ref, Validator, ValidatorConfig, tag


@dataclass
class User:
    id: str = tag("len:36")
    name: str = tag("min:2")
    age: int = tag("min:18")
    email: str = tag("max:64")
    role: str = tag("in:admin,stuff")
    phones: list = tag("max:3", default_factory=list)
    meta: dict = field(default_factory=dict)


@dataclass
class App:
    version: str = tag("len:5")


@dataclass
class Response:
    code: int = tag("in:200,404,500")
    body: str = tag("-", default="")


@dataclass
class Token:
    header: bytes = b""
    payload: bytes = b""
    signature: bytes = b""


@dataclass
class Item:
    sku: str = tag("len:4")
    qty: int = tag("min:1", default=1)


@dataclass
class Order:
    number: str = tag("min:1")
    items: list = field(default_factory=list)


class Product(BaseModel):
    code: str = Field(json_schema_extra={"validate": "len:3"})
    price: int = Field(json_schema_extra={"validate": "min:0"})
    note: str = ""


def make_user(**overrides):
    values = {
        "id": "a" * 36,
        "name": "Alice",
        "age": 30,
        "email": "alice@example.com",
        "role": "admin",
    }
    values.update(overrides)
    return User(**values)


@pytest.fixture
def validator():
    """Validator with default configuration."""
    return Validator()


@pytest.fixture
def flat_validator():
    """Validator that does not descend into nested records."""
    return Validator(ValidatorConfig(nested=False))


@pytest.fixture
def valid_user():
    return make_user()


@pytest.fixture
def order_with_bad_item():
    """Order -> list of refs -> items; only the second item is invalid."""
    return Order(
        number="A-1",
        items=[Ref(Item(sku="abcd")), Ref(Item(sku="abc")), Ref(Item(sku="wxyz", qty=2))],
    )
