"""Event selection, object identification and recoil variables for collider events."""

__version__ = "0.1.0"