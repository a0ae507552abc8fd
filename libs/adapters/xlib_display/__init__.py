from .fakes import FakeDisplayServer

__all__ = ["FakeDisplayServer", "XlibDisplay"]


def __getattr__(name: str):
    # Lazy: importing the fakes must not require python-xlib or an X server
    if name == "XlibDisplay":
        from .xlib import XlibDisplay

        return XlibDisplay
    raise AttributeError(name)
