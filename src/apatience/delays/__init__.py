r"""Delay factories for the sleeps between two attempts.

This package provides the fixed and exponential delay factories. Each
factory creates a fresh, single-use delay generator per wait.
"""

from __future__ import annotations

__all__ = ["BaseDelayFactory", "ExponentialDelay", "FixedDelay"]

from apatience.delays.base import BaseDelayFactory
from apatience.delays.exponential import ExponentialDelay
from apatience.delays.fixed import FixedDelay
