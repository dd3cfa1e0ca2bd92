"""Gymnasium environment wrapper."""

from .gym_env import BoardGameEnv

__all__ = ["BoardGameEnv"]
