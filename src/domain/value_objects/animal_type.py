from __future__ import annotations

from enum import Enum


class AnimalType(str, Enum):
    DAIRY = "dairy"
    BEEF = "beef"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
