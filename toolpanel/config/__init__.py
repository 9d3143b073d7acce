"""Configuration package for the tool panel runtime."""

__all__ = ["ConfigController", "ConfigPaths"]


def __getattr__(name: str):
    if name in __all__:
        from toolpanel.config import controller

        return getattr(controller, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
