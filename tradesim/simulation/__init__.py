"""Tick-driven orchestration of the simulated market."""

from .driver import SimulationDriver, TickResult, InitialData

__all__ = ['SimulationDriver', 'TickResult', 'InitialData']
