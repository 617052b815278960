"""Factory Boy definition for :class:`boundary.models.circle_type.CircleType`."""

from __future__ import annotations

from boundary.models.circle_type import CircleType

import factory
from tests.factories import BaseFactory


class CircleTypeFactory(BaseFactory):
    class Meta:
        model = CircleType

    id = None
    name = factory.Sequence(lambda n: f"circle{n}")
    display_name = factory.LazyAttribute(lambda o: o.name.capitalize())
    description = "Circle for tests"
    icon = "group"
    color = "#2196F3"
    default_settings = factory.LazyFunction(lambda: {"allowInvites": True})
    is_system = True
