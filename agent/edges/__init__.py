# Conditional edges
from .routing import route_input

__all__ = [
    "route_input",
]
