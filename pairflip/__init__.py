"""
Pairflip - Memory Match Engine

A deterministic, event-driven engine for the classic pairs game.
The engine provides:
- Board dealing (paired symbols, Fisher-Yates shuffle)
- An immutable game state and a pure reducer
- A turn controller with a cancellable resolution delay
- An HTTP/WebSocket API and a terminal CLI
"""

__version__ = "0.1.0"
