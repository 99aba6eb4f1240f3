"""Metadata helpers for MWA observations: timesteps, rf inputs, visibility polarisations and voltage files."""

__version__ = "0.1.0"

__all__ = ["rfinput", "timestep", "visibility_pol", "voltage_files"]