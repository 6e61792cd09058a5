"""Scoring configuration and two-level validation: syntactic, semantic.

Syntactic = structure and types of a JSON scoring config.
Semantic  = cross-field consistency (e.g. all weights zero).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class CoOccurrenceMethod(str, Enum):
    JACCARD = "jaccard"
    PMI = "pmi"


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and flags for combined sentence similarity.

    Defaults reproduce plain ranking: 95% TF-IDF, 5% character
    similarity, no filler filtering, co-occurrence disabled.
    """

    tfidf_weight: float = 0.95
    char_weight: float = 0.05
    filter_fillers: bool = False
    co_occ_weight: float = 0.0
    co_occ_method: CoOccurrenceMethod = CoOccurrenceMethod.JACCARD


class ConfigError(ValueError):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


VALID_METHODS = {m.value for m in CoOccurrenceMethod}
WEIGHT_FIELDS = ("tfidf_weight", "char_weight", "co_occ_weight")
KNOWN_FIELDS = {"name", "filter_fillers", "co_occ_method", *WEIGHT_FIELDS}


# ── Syntactic Validation ────────────────────────────────────────────

def validate_syntactic(config: dict) -> list[str]:
    """Check field names and types.  Returns list of error strings."""
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config must be a JSON object."]

    unknown = sorted(set(config) - KNOWN_FIELDS)
    if unknown:
        errors.append(f"Unknown fields: {unknown}. Known fields: {sorted(KNOWN_FIELDS)}.")

    name = config.get("name")
    if name is not None and (not isinstance(name, str) or not name):
        errors.append("'name' must be a non-empty string if provided.")

    for field in WEIGHT_FIELDS:
        value = config.get(field)
        if value is None:
            continue
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            errors.append(f"'{field}' must be a non-negative number.")

    ff = config.get("filter_fillers")
    if ff is not None and not isinstance(ff, bool):
        errors.append("'filter_fillers' must be a boolean.")

    method = config.get("co_occ_method")
    if method is not None and method not in VALID_METHODS:
        errors.append(f"'co_occ_method' must be one of {sorted(VALID_METHODS)}, got '{method}'.")

    return errors


# ── Semantic Validation ─────────────────────────────────────────────

def validate_semantic(config: dict) -> list[str]:
    """Check cross-field logical consistency."""
    errors: list[str] = []
    defaults = ScoringConfig()

    tfidf = config.get("tfidf_weight", defaults.tfidf_weight)
    char = config.get("char_weight", defaults.char_weight)
    co_occ = config.get("co_occ_weight", defaults.co_occ_weight)

    if tfidf + char + co_occ <= 0:
        errors.append(
            "All weights are zero. At least one of 'tfidf_weight', 'char_weight' "
            "or 'co_occ_weight' must be positive, otherwise every sentence scores 0."
        )

    method = config.get("co_occ_method")
    if method is not None and method != defaults.co_occ_method.value and co_occ == 0:
        errors.append(
            f"'co_occ_method' is '{method}' but 'co_occ_weight' is 0. "
            "The method has no effect unless 'co_occ_weight' is positive."
        )

    return errors


# ── Top-level validate / load ───────────────────────────────────────

def _read_config(config_path: str) -> tuple[dict | None, list[str]]:
    path = Path(config_path)
    try:
        return json.loads(path.read_text(encoding="utf-8")), []
    except json.JSONDecodeError as e:
        return None, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return None, [f"Config file not found: {config_path}"]
    except UnicodeDecodeError as e:
        return None, [f"Config file is not UTF-8: {e}"]
    except OSError as e:
        return None, [f"Could not read config file {config_path}: {e}"]


def validate_config(config_path: str) -> tuple[bool, list[str]]:
    """Run syntactic + semantic validation on a config file.

    Returns (passed, errors).
    """
    config, errors = _read_config(config_path)
    if errors:
        return False, errors

    syn_errors = validate_syntactic(config)
    if syn_errors:
        return False, syn_errors

    sem_errors = validate_semantic(config)
    if sem_errors:
        return False, sem_errors

    return True, []


def config_from_dict(config: dict) -> ScoringConfig:
    """Build a ScoringConfig from an already validated dict."""
    defaults = ScoringConfig()
    return ScoringConfig(
        tfidf_weight=float(config.get("tfidf_weight", defaults.tfidf_weight)),
        char_weight=float(config.get("char_weight", defaults.char_weight)),
        filter_fillers=config.get("filter_fillers", defaults.filter_fillers),
        co_occ_weight=float(config.get("co_occ_weight", defaults.co_occ_weight)),
        co_occ_method=CoOccurrenceMethod(
            config.get("co_occ_method", defaults.co_occ_method.value)
        ),
    )


def load_scoring_config(config_path: str) -> ScoringConfig:
    """Validate and load a scoring config.  Raises ConfigError on failure."""
    passed, errors = validate_config(config_path)
    if not passed:
        raise ConfigError(errors)
    config, _ = _read_config(config_path)
    return config_from_dict(config)
