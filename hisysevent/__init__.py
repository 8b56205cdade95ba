"""Client-side helpers for system events: rules, parcels, callbacks, event checking and tool logic."""

__version__ = "0.1.0"