from backend.engine.gamestate.state import GameState, Phase, Snapshot

__all__ = ["GameState", "Phase", "Snapshot"]
