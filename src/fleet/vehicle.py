"""Vehicle dataclass representing a single car waiting to be washed."""

from dataclasses import dataclass, field
from typing import Dict

from src.config.errors import MissingEffectivenessError


@dataclass
class Vehicle:
    vehicle_id: int
    dirtiness: float                      # Remaining dirt, never negative after a wash
    effectiveness: Dict[str, float] = field(default_factory=dict)  # wash type -> factor

    def effectiveness_for(self, wash_type: str) -> float:
        try:
            return self.effectiveness[wash_type]
        except KeyError:
            raise MissingEffectivenessError(self.vehicle_id, wash_type) from None

    @property
    def is_clean(self) -> bool:
        return self.dirtiness == 0
