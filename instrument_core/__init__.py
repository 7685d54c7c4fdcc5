# Instrument Core - Source Package
"""
Instrument Core: numeric and scheduling primitives for simulated cockpit
instrument updates.

Modules:
    - utils: Helper utilities (heading conversion, great-circle geometry,
      update throttling, state machines, frame timing)
    - config: YAML parameter loading
    - exceptions: Error hierarchy
"""

__version__ = "1.0.0"
