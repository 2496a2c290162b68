"""
Raft Core - the game simulation and its collaborators.

This module provides the core game loop (spawning, motion, collision and the
Playing/GameOver state machine), the frame driver, the Gymnasium environment
wrapper and the supporting audio/asset/render pieces.

Main exports:
- CoreGame: Game simulation (state, spawner, engine, state machine, input events)
- FrameDriver / SpawnTimer: Single-threaded frame and spawn clocks
- RaftEnv: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
"""

from raftrush.raft_core.config_loader import GameConfig, load_config
from raftrush.raft_core.state import GameState, GameStateMachine, Phase
from raftrush.raft_core.game import CoreGame
from raftrush.raft_core.driver import FrameDriver, SpawnTimer
from raftrush.raft_core.env_gym import RaftEnv

__all__ = [
    "GameConfig",
    "load_config",
    "GameState",
    "GameStateMachine",
    "Phase",
    "CoreGame",
    "FrameDriver",
    "SpawnTimer",
    "RaftEnv",
]
