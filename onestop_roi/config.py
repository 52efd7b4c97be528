from __future__ import annotations

from typing import Any, Dict, Mapping
import os
import io
import yaml

from .schema import KEY_ALIASES
from .templates import DEFAULT_PARAMETERS, get_template
from .types import InvestmentParameters


def _parse_yaml_fallback(text: str) -> Dict[str, Any]:
    """
    Super-tolerant parser for key: value lines (only for emergencies).
    Booleans and numbers are coerced when obvious; nesting is ignored.
    """
    data: Dict[str, Any] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if ":" not in line:
            continue
        k, v = line.split(":", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if not v:
            continue
        if v.lower() in ("true", "false"):
            data[k] = v.lower() == "true"
            continue
        try:
            data[k] = float(v) if "." in v else int(v.replace("_", ""))
        except ValueError:
            data[k] = v
    return data


def _flatten_grouped(cfg: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Flatten shallow groups like {'investment': {...}, 'rates': {...}} into one
    level. Group keys are dropped; top-level keys win on collisions.
    """
    flat: Dict[str, Any] = {k: v for k, v in cfg.items() if not isinstance(v, dict)}
    for v in cfg.values():
        if isinstance(v, dict):
            for sk, sv in v.items():
                flat.setdefault(sk, sv)
    return flat


def normalize_params(cfg: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten groups and map portal camelCase keys onto parameter names."""
    out: Dict[str, Any] = {}
    for k, v in _flatten_grouped(cfg).items():
        out.setdefault(KEY_ALIASES.get(k, k), v)
    return out


def resolve_params(cfg: Mapping[str, Any]) -> InvestmentParameters:
    """
    Turn a config mapping into InvestmentParameters. A 'template' key selects
    the base preset; every other recognised key overrides it.
    """
    flat = normalize_params(cfg)
    template = flat.get("template")
    base = get_template(template) if template else DEFAULT_PARAMETERS
    merged = base.as_dict()
    merged.update(flat)
    return InvestmentParameters.from_mapping(merged)


def read_config_text(source: str | os.PathLike | io.StringIO) -> Dict[str, Any]:
    """Parse YAML from a path or text stream; fall back to key: value lines."""
    text: str
    if hasattr(source, "read"):
        text = str(source.read())
    else:
        p = os.fspath(source)
        with open(p, "r", encoding="utf-8") as f:
            text = f.read()

    try:
        cfg = yaml.safe_load(text) or {}
        if not isinstance(cfg, dict):
            cfg = {}
    except yaml.YAMLError:
        cfg = _parse_yaml_fallback(text)
    return cfg


def load_model_config(source: str | os.PathLike | io.StringIO) -> InvestmentParameters:
    """Load YAML from a path or text stream and resolve it into parameters."""
    return resolve_params(read_config_text(source))
