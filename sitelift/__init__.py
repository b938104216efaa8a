from .context import context

__all__ = ["context"]
