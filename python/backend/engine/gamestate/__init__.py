from backend.engine.gamestate.state import Progress, is_complete

__all__ = ["Progress", "is_complete"]
