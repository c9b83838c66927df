"""
Utilities for loading the shipment workflow (stages and transitions) configuration.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from app.models.shipment import ShipmentStage

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "workflow.yaml"


@lru_cache()
def load_workflow_config() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return {}
    with open(CONFIG_PATH, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _as_stage(value: Optional[str]) -> Optional[ShipmentStage]:
    if not value:
        return None
    try:
        return ShipmentStage(str(value).strip().upper())
    except ValueError:
        return None


def parse_stage(value: Optional[str]) -> Optional[ShipmentStage]:
    """Return the recognized stage for a status string, or None."""
    return _as_stage(value)


def get_initial_stage() -> ShipmentStage:
    return _as_stage(load_workflow_config().get("initial_stage")) or ShipmentStage.CLIENT_DETAILS


def get_terminal_stage() -> ShipmentStage:
    return _as_stage(load_workflow_config().get("terminal_stage")) or ShipmentStage.COMPLETED


def get_allowed_transitions(current: Optional[str]) -> Set[ShipmentStage]:
    """Stages reachable from ``current``.

    Without a transitions table, or when the current status predates the
    stage list, every recognized stage is reachable.
    """
    transitions = load_workflow_config().get("transitions")
    current_stage = _as_stage(current)
    if not transitions or current_stage is None:
        return set(ShipmentStage)

    targets = transitions.get(current_stage.value) or []
    allowed = {stage for stage in (_as_stage(t) for t in targets) if stage is not None}
    allowed.add(current_stage)
    return allowed


def is_transition_allowed(current: Optional[str], target: ShipmentStage) -> bool:
    return target in get_allowed_transitions(current)
