# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""Analysis configuration, loaded through an OmegaConf structured schema."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from logpct.exceptions import ConfigError
from logpct.stats.percentiles import METHODS, NEAREST

DEFAULT_PERCENTILES = "50, 80, 90, 95, 99, 99.5, 99.7"


@dataclass
class AnalysisConfig:
    # numeric field extracted from every record
    field_name: str = "duration"
    # exact match on `serviceCode`, empty = no filter
    service_filter: str = ""
    # match on `errorCode` rendered as text, empty = no filter
    error_filter: str = ""
    # inclusive date/time bounds, empty = unbounded
    from_date: str = ""
    to_date: str = ""
    percentiles: str = DEFAULT_PERCENTILES
    method: str = NEAREST
    bucket_minutes: float = 5.0
    bucket_percentile: float = 99.0
    time_series: bool = True


def load_config(
    path: Optional[Union[str, Path]] = None, **overrides: Any
) -> AnalysisConfig:
    """
    Build an `AnalysisConfig` from defaults, an optional YAML file and overrides.

    Args:
        path: YAML file whose keys are `AnalysisConfig` fields
        overrides: Field values taking precedence over the file

    Raises:
        ConfigError: unknown keys, wrong types, or an unknown method.
    """
    try:
        cfg = OmegaConf.structured(AnalysisConfig)
        if path is not None:
            cfg = OmegaConf.merge(cfg, OmegaConf.load(str(path)))
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.create(overrides))
        config = OmegaConf.to_object(cfg)
    except (OmegaConfBaseException, OSError) as e:
        raise ConfigError(f"Invalid analysis config: {e}") from e

    assert isinstance(config, AnalysisConfig)
    config.field_name = (config.field_name or "duration").strip() or "duration"
    config.service_filter = config.service_filter.strip()
    config.error_filter = config.error_filter.strip()
    if config.method not in METHODS:
        raise ConfigError(
            f"Invalid analysis config: method must be one of {list(METHODS)}, "
            f"got {config.method!r}"
        )
    return config


def config_to_yaml(config: AnalysisConfig) -> str:
    return OmegaConf.to_yaml(OmegaConf.structured(config))
