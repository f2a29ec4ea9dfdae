from __future__ import annotations

from typing import Any
import math

import numpy as np
import pandas as pd


def to_native_json(obj: Any) -> Any:
    """Recursively convert aggregation output into JSON-safe native types.
    - numpy scalars -> Python scalars, NaN/Inf -> None
    - DataFrame -> list of row dicts
    - Series / ndarray / tuple -> list
    """
    if obj is None:
        return None
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, np.generic):
        return to_native_json(obj.item())
    if isinstance(obj, pd.DataFrame):
        return [to_native_json(r) for r in obj.to_dict(orient="records")]
    if isinstance(obj, (pd.Series, np.ndarray)):
        return to_native_json(obj.tolist())
    if isinstance(obj, (list, tuple, set)):
        return [to_native_json(v) for v in obj]
    if isinstance(obj, dict):
        return {str(k): to_native_json(v) for k, v in obj.items()}
    if obj is pd.NA or obj is pd.NaT:
        return None
    return obj
