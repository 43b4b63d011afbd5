# Bladework: Blade Algebra Engine (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Algebra configuration.

Builds a :class:`~core.algebra.BladeAlgebra` from an OmegaConf node, so
collaborators can keep their algebra next to the rest of their config::

    algebra:
      signature: {p: 3, q: 0, r: 0}   # or  metric: [[...]]  or  conformal: 3
      device: auto
      log_level: INFO                 # optional

Presets live in ``conf/algebra/``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Union

import torch
from omegaconf import DictConfig, OmegaConf

from core.algebra import BladeAlgebra
from core.cayley import CayleyCache
from core.metric import Metric
from log import get_logger, set_level

logger = get_logger(__name__)

PRESET_DIR = Path(__file__).resolve().parent.parent / "conf" / "algebra"

_METRIC_KEYS = ("metric", "signature", "conformal")


def resolve_device(device: str = "auto") -> str:
    """Resolve ``'auto'`` to the best available accelerator.

    Priority: cuda > mps > cpu.
    """
    if device != "auto":
        return device
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


def metric_from_config(cfg: Union[DictConfig, Mapping]) -> Metric:
    """Builds the metric described by exactly one of ``metric``,
    ``signature`` or ``conformal``.
    """
    if not isinstance(cfg, DictConfig):
        cfg = OmegaConf.create(dict(cfg))
    given = [k for k in _METRIC_KEYS if cfg.get(k) is not None]
    if len(given) != 1:
        raise ValueError(
            f"algebra config needs exactly one of {list(_METRIC_KEYS)}, got {given}"
        )

    key = given[0]
    if key == "metric":
        matrix = OmegaConf.to_container(cfg.metric, resolve=True)
        return Metric(matrix, cfg.get("dim", None))
    if key == "signature":
        sig = cfg.signature
        return Metric.from_signature(sig.get("p", 0), sig.get("q", 0), sig.get("r", 0))
    return Metric.conformal(int(cfg.conformal))


def algebra_from_config(cfg: Union[DictConfig, Mapping],
                        cache: Optional[CayleyCache] = None) -> BladeAlgebra:
    """Builds an algebra from a config node.

    Args:
        cfg: Node with one metric key plus optional ``dim``, ``device`` and
            ``log_level``. A node with an ``algebra`` child is unwrapped first.
        cache (CayleyCache, optional): Table store to share.

    Raises:
        ValueError: If no or several metric keys are given.
        DimensionMismatch: If ``dim`` disagrees with the metric.
    """
    if not isinstance(cfg, DictConfig):
        cfg = OmegaConf.create(dict(cfg))
    if cfg.get("algebra") is not None:
        cfg = cfg.algebra

    if cfg.get("log_level") is not None:
        set_level(cfg.log_level)

    metric = metric_from_config(cfg)
    device = resolve_device(cfg.get("device", "cpu"))
    algebra = BladeAlgebra(metric, dim=cfg.get("dim", None), cache=cache, device=device)
    logger.info(f"Configured {algebra!r} on {device}")
    return algebra


def load_algebra(path: Union[str, Path], cache: Optional[CayleyCache] = None) -> BladeAlgebra:
    """Loads a YAML algebra config; bare names resolve to ``conf/algebra/<name>.yaml``."""
    path = Path(path)
    if not path.suffix and not path.exists():
        path = PRESET_DIR / f"{path.name}.yaml"
    return algebra_from_config(OmegaConf.load(path), cache=cache)
