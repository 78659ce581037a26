from backend.engine.gamegenerator.generator import DEFAULT_OPTION_COUNT, GameGenerator

__all__ = ["DEFAULT_OPTION_COUNT", "GameGenerator"]
