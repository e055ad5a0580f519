"""Save and load sketch configurations as JSON."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

import numpy as np

from phaselab.config import SketchConfig

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=SketchConfig)


def _convert(d: Any) -> Any:
    """Numpy arrays/scalars and tuples -> JSON-friendly types."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Union[SketchConfig, Dict[str, Any]], path: Union[str, Path]) -> None:
    """
    Save a configuration (dataclass or dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_dict() if isinstance(config, SketchConfig) else config
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(data), f, indent=2, ensure_ascii=False)
    logger.debug("Saved config to %s", path)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration dict from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_sketch_config(path: Union[str, Path], cls: Type[C]) -> C:
    """Load JSON and build a validated config of type ``cls``."""
    return cls.from_dict(load_config(path))
