"""Tavern of Heroes: idle dungeon simulation core and CLI."""
