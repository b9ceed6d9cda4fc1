"""Scripted host simulator."""

from .sim import ISim, Sim, scripted_turn

__all__ = ["ISim", "Sim", "scripted_turn"]
