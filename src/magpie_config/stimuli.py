"""
Stimuli file access.

The configuration only names the main stimuli CSV (``stimuli.main``, relative
to the experiment root); these helpers resolve that path and load the table so
deployments can be checked before they go live. Rendering stimuli is the
experiment runtime's job.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

from .config.paths import PathManager
from .config.record import ExperimentConfig
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_stimuli_path(
    config: ExperimentConfig, base_dir: Optional[Union[str, Path]] = None
) -> Path:
    """Absolute path of the main stimuli file for ``config``."""
    return PathManager(base_dir).get_stimuli_path(config.stimuli.main).resolve()


def load_stimuli(
    config: ExperimentConfig, base_dir: Optional[Union[str, Path]] = None
) -> pd.DataFrame:
    """
    Load the main stimuli CSV.

    Args:
        config: Experiment configuration naming the stimuli file
        base_dir: Experiment root the path is relative to (default: cwd)

    Returns:
        DataFrame with one row per stimulus

    Raises:
        FileNotFoundError: If the stimuli file doesn't exist
        ConfigurationError: If the file can't be parsed or has no rows
    """
    path = resolve_stimuli_path(config, base_dir)
    if not path.exists():
        raise FileNotFoundError(
            f"Stimuli file not found at {path}. "
            f"Check stimuli.main ('{config.stimuli.main}') and the experiment root."
        )

    try:
        df = pd.read_csv(path)
    except pd.errors.EmptyDataError as e:
        raise ConfigurationError(f"Stimuli file {path} is empty", field="stimuli.main") from e
    except pd.errors.ParserError as e:
        raise ConfigurationError(
            f"Stimuli file {path} is not valid CSV: {e}", field="stimuli.main"
        ) from e

    if df.empty:
        raise ConfigurationError(f"Stimuli file {path} has no rows", field="stimuli.main")

    logger.info(f"Loaded {len(df)} stimuli with columns {list(df.columns)} from {path}")
    return df


def summarize_stimuli(df: pd.DataFrame) -> Dict[str, Any]:
    """Row count and column names of a loaded stimuli table."""
    return {"rows": len(df), "columns": list(df.columns)}
