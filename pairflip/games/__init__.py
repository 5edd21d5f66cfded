"""
Games module - Game-specific content.

Each game has its own subpackage with:
- Symbol set and deck geometry
- Deck creation and shuffling
"""
