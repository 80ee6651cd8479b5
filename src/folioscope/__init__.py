"""Folioscope - portfolio analytics: indicators, price levels, signals and P&L."""

__version__ = "0.1.0"
