"""Single-room thermostat simulator with a web dashboard."""
__version__ = "0.1.0"
