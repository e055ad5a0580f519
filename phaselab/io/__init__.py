"""Configuration files."""

from phaselab.io.serializers import load_config, load_sketch_config, save_config

__all__ = ["save_config", "load_config", "load_sketch_config"]
