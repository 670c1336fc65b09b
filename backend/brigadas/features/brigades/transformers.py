"""Data mapper turning database rows into JSON-ready dictionaries."""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping


class BrigadeTransformer:
    """Data mapper for the brigades feature."""

    @staticmethod
    def row_to_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
        """Copy a row keyed by column name; decimals become plain numbers."""
        return {
            key: float(value) if isinstance(value, Decimal) else value
            for key, value in row.items()
        }

    @classmethod
    def rows_to_dicts(cls, rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [cls.row_to_dict(row) for row in rows]
