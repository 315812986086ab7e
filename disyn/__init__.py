"""Distortion synthesis voice: oscillator algorithms, envelope, reverb and control logic."""

__version__ = "0.1.0"