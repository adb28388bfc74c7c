"""
Web application package for the Tablut engine.

Provides a FastAPI-based REST API that returns the engine's move for a game
given as a move list.
"""
