import json
from pathlib import Path

from pydantic import ValidationError

from tracerecon.domain.models.scenario import Scenario
from tracerecon.exceptions import ConfigurationError
from tracerecon.scenarios.fraxtal_odos import FRAXTAL_ODOS_V1


def load_scenario(path: str = "") -> Scenario:
    """Load a scenario JSON file (amounts as decimal strings), or the built-in Fraxtal scenario."""
    if not path:
        return FRAXTAL_ODOS_V1
    try:
        raw = json.loads(Path(path).read_text())
        return Scenario.model_validate(raw)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Scenario file not found: {path}") from exc
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid scenario file {path}: {exc}") from exc
