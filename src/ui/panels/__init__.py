"""Widgets making up the calculator window."""
from .parameters import ParameterPanel
from .controls import ControlPanel
from .results import ResultsPanel
from .status import StatusBar


__all__ = ['ParameterPanel', 'ControlPanel', 'ResultsPanel', 'StatusBar']
