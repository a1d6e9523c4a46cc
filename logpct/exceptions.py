# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.


class LogPctError(Exception):
    """Base exception for the package."""

    pass


class MissingInputError(LogPctError):
    """Raised when an analysis is requested before a log file was selected."""

    pass


class ConfigError(LogPctError):
    """Raised when the analysis configuration cannot be loaded or is invalid."""

    pass
