import json
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """
    Rounds a monetary amount to 2 decimals, half away from zero.
    Works on the shortest decimal form of the float, so 2.675 -> 2.68 (not 2.67).
    """
    rounded = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    # Adding 0.0 turns a negative zero into 0.0
    return float(rounded) + 0.0


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def load_csv(file_path: Path, dtype: dict[str, Any] | None = None) -> pd.DataFrame | None:
    """
    A more robust CSV loader with a multi-stage encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1 - A permissive fallback that never fails but might misinterpret characters.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", dtype=dtype)

    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(file_path, encoding="latin-1", dtype=dtype)
        except (ValueError, pd.errors.ParserError) as e_latin1:
            logger.error(
                f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"File not found at {file_path}, skipping.")
        return None

    except (ValueError, pd.errors.ParserError) as e_general:
        logger.error(
            f"An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None


def load_json(file_path: Path) -> Any | None:
    """Loads a JSON document, returning None if it is missing or not valid JSON."""
    try:
        with open(file_path, encoding="utf-8-sig") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.info(f"File not found at {file_path}, skipping.")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Could not parse {file_path.name} as JSON. Reason: {e}")
        return None
