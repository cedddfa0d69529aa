from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from .errors import UnknownCalculationTypeError
from .types import CalculationType

if TYPE_CHECKING:
    from ..engines.factory import EngineServices
    from ..engines.interfaces import IslamicArithmeticProtocol

log = logging.getLogger(__name__)


def _key(name: Union[str, CalculationType]) -> str:
    return name.value if isinstance(name, CalculationType) else str(name)


@dataclass
class EngineRegistry:
    _engines: Dict[str, "IslamicArithmeticProtocol"]
    services: Optional["EngineServices"] = field(default=None)

    def get(self, name: Union[str, CalculationType]) -> "IslamicArithmeticProtocol":
        key = _key(name)
        if key not in self._engines:
            raise UnknownCalculationTypeError(f"Unknown engine '{key}'. Available: {sorted(self._engines)}")
        return self._engines[key]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(
        self,
        name: Union[str, CalculationType],
        engine: "IslamicArithmeticProtocol",
        *,
        overwrite: bool = False,
    ) -> None:
        key = _key(name)
        if (not overwrite) and (key in self._engines):
            raise KeyError(f"Engine '{key}' already exists. Use overwrite=True to replace.")
        log.debug("registering engine %s (%s)", key, type(engine).__name__)
        self._engines[key] = engine

    def __contains__(self, name: object) -> bool:
        if isinstance(name, (str, CalculationType)):
            return _key(name) in self._engines
        return False
