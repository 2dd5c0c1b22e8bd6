from .adder import add
from .errors import ConfigError, FiboError, InvalidInputError
from .fibo import fibonacci

__version__ = "0.1.0"

__all__ = [
    "add",
    "fibonacci",
    "FiboError",
    "InvalidInputError",
    "ConfigError",
]
