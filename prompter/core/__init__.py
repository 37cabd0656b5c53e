"""Core — models, checks, configuration and the acquisition engine."""
