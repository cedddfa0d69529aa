"""Registry bootstrap (import side-effect)."""
from .api import set_registry
from .bootstrap import build_registry
from .config import HijriConfig

set_registry(build_registry(HijriConfig.from_env()))
