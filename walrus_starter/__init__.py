"""walrus-starter -- scaffold Walrus storage applications from preset layers."""

__version__ = "0.4.0"
