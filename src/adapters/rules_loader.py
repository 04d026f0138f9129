"""Carga de reglas desde JSON.

Formato:
- {"rules": [{"baseUrl": "...", "query": "...", "headers": {...}}, ...]}
- También se acepta una lista JSON de reglas sin envoltorio.

Nota:
- Solo validación de esquema (pydantic). De dónde salen los secretos que
  contienen las reglas no es asunto de este módulo.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RulesFile


def load_rules(path: Path) -> RulesFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, list):
        data = {"rules": data}
    return RulesFile.model_validate(data)
