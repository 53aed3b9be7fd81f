# cli/__init__.py
from .generate import register as register_generate
from .config import register as register_config, show_config

__all__ = ["register_generate", "register_config", "show_config"]
