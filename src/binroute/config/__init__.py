"""Configuration module for binroute parameters."""

from .loader import default_params, save_yaml
from .loader import load_yaml as load_binroute_params
from .params import (
    BinrouteParams,
    IOParams,
    RoutingParams,
    RuntimeParams,
    SimulationParams,
)

__all__ = [
    "RoutingParams",
    "SimulationParams",
    "IOParams",
    "RuntimeParams",
    "BinrouteParams",
    "default_params",
    "load_binroute_params",
    "save_yaml",
]
