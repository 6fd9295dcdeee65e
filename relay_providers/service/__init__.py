"""Service layer: provider manager, model-list cache and chat runner."""

from .manager import ProviderManager
from .models_cache import ModelListCache
from .runner import ChatRunner, TurnOptions

__all__ = ["ProviderManager", "ModelListCache", "ChatRunner", "TurnOptions"]
