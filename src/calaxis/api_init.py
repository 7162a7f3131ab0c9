"""Registry bootstrap (import side-effect)."""
from .api import set_registry
from .attributes import standard as _standard  # noqa: F401  (registers attributes)
from .bootstrap import build_registry

set_registry(build_registry())
