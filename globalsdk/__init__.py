"""globalsdk — global .NET SDK installation manager."""

__version__ = "0.1.0"
