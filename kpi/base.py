"""
kpi/base.py

Abstract base class for all KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from kpi.models import KPI

InputT = TypeVar("InputT")


class BaseKPIFormula(ABC, Generic[InputT]):
    """
    Contract for KPI formula implementations.

    Subclasses receive an immutable input bundle of pre-fetched records
    and return an ordered list of display-ready :class:`KPI` tiles.

    :meth:`calculate` performs no I/O and has no side effects; missing or
    malformed data resolves to documented defaults instead of raising.
    """

    @abstractmethod
    def calculate(self, inputs: InputT) -> list[KPI]:
        """
        Compute KPI tiles from *inputs*.

        Parameters
        ----------
        inputs:
            Formula-specific input bundle.

        Returns
        -------
        list[KPI]
            Tiles in display order.  A new list is built on every call.
        """
