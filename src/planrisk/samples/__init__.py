"""Bundled sample plan for demos and smoke tests."""

import json
from pathlib import Path
from typing import Dict, Any

SAMPLE_PLAN_PATH = Path(__file__).parent / "sample_plan.json"


def load_sample_plan() -> Dict[str, Any]:
    """Return the bundled sample Terraform plan as parsed JSON."""
    with open(SAMPLE_PLAN_PATH, 'r', encoding='utf-8') as f:
        return json.load(f)
