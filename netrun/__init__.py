"""
Netrun - Card Component Execution Engine

A turn-based cyberpunk deck-builder engine where cards carry composable
components (cost, target, effect, zone) that run in order against a
mutable execution context. The engine provides:
- A component protocol and a library of concrete components
- Zone bookkeeping for card instances
- An execution queue that can suspend for target selection and resume
- Player, market and threat state helpers
"""

__version__ = "0.1.0"
