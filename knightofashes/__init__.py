"""A side-scrolling action RPG: game rules, map files and a pygame front end."""

__version__ = "0.1.0"