from __future__ import annotations
from typing import Optional

from hijricalc.config import HijriConfig
from hijricalc.core.engine import EngineRegistry
from hijricalc.engines.factory import EngineServices, build_services, make_engine
from hijricalc.engines.specs import ALL_SPECS


def build_registry(
    config: Optional[HijriConfig] = None,
    *,
    services: Optional[EngineServices] = None,
) -> EngineRegistry:
    if services is None:
        services = build_services(config)
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec, services)
    return EngineRegistry(engines, services=services)
