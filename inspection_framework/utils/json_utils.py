"""
JSON serialization helpers for profile and analysis results.

Result to_dict() payloads are plain Python; the encoder below also accepts
numpy scalars and enum members (TypeTag, Direction) handed in directly.
"""

import json
from enum import Enum
from typing import Any

import numpy as np


class NumpyJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for numpy scalars and enum values.

    Converts:
    - numpy integers and floats to Python numbers (NaN/inf to null)
    - numpy bool to Python bool
    - Enum members to their value
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            if np.isnan(obj) or np.isinf(obj):
                return None
            return float(obj)

        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, Enum):
            return obj.value

        return super().default(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Serialize to a JSON string with NumpyJSONEncoder and 2-space indent.

    Args:
        obj: Object to serialize
        **kwargs: Additional arguments for json.dumps
    """
    kwargs.setdefault('cls', NumpyJSONEncoder)
    kwargs.setdefault('indent', 2)
    return json.dumps(obj, **kwargs)


def safe_json_dump(obj: Any, fp, **kwargs) -> None:
    """
    Serialize to an open file with NumpyJSONEncoder and 2-space indent.

    Args:
        obj: Object to serialize
        fp: File object to write to
        **kwargs: Additional arguments for json.dump
    """
    kwargs.setdefault('cls', NumpyJSONEncoder)
    kwargs.setdefault('indent', 2)
    json.dump(obj, fp, **kwargs)
