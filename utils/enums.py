from enum import Enum, auto

class BackendType(Enum):
    NUMBA = auto()
    PYTHON = auto()

class EngineMode(Enum):
    BANDED = auto()
    SEQUENTIAL = auto()

class IntensityMode(Enum):
    WRAP = auto()
    CLAMP = auto()
