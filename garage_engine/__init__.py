"""Garage build engine: horsepower, cost and performance for modified vehicles."""

__version__ = "1.0.0"
