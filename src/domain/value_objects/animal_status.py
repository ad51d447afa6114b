from __future__ import annotations

from enum import Enum


class AnimalStatus(str, Enum):
    HEALTHY = "healthy"
    SICK = "sick"
    PREGNANT = "pregnant"
    LACTATING = "lactating"
    DRY = "dry"
