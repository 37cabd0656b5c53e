"""Configuration — YAML loading and per-call parameter resolution."""
