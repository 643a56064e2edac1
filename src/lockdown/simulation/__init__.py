"""Simulation subsystem — zones, inmates, guards and the tick driver."""
from .engine import SimulationEngine
from .evader import Evader, EvaderConfig, FreezeState
from .paths import generate_escape_path
from .power import PowerConfig, PowerSupply
from .pursuer import Capture, Pursuer, PursuerConfig, PursuerMode, PursuerTickResult
from .spawner import EvaderSpawner, SpawnConfig
from .zone import BoostState, IlluminationZone, ZoneConfig

__all__ = [
    "BoostState",
    "Capture",
    "Evader",
    "EvaderConfig",
    "EvaderSpawner",
    "FreezeState",
    "IlluminationZone",
    "PowerConfig",
    "PowerSupply",
    "Pursuer",
    "PursuerConfig",
    "PursuerMode",
    "PursuerTickResult",
    "SimulationEngine",
    "SpawnConfig",
    "ZoneConfig",
    "generate_escape_path",
]
