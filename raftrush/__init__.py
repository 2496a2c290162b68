"""
Raft Rush Package
=================

Single-screen obstacle dodging game: steer the raft left and right to avoid
the rocks drifting down the river. Every rock that leaves the bottom of the
field scores one point; touching a rock ends the run until restart.

- raft_core: simulation (spawning, motion, collision, state machine),
  renderers, audio and the Gymnasium wrapper

All tunable parameters are in game_config.yaml.
"""
