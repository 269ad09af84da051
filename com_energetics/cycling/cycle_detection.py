"""Crank cycle detection from the crank angle signal.

A crank cycle is bounded by two consecutive peaks of the angle channel. Only
peaks taller than a fixed fraction of the channel maximum are kept, which
rejects the small secondary maxima produced by sensor noise.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import numpy as np
from scipy.signal import find_peaks

from com_energetics.config import PEAK_HEIGHT_FRACTION
from com_energetics.errors import MissingInputError

logger = logging.getLogger(__name__)


class CycleBoundary(NamedTuple):
    """Sample indices (inclusive) delimiting one crank cycle."""

    start: int
    end: int


class PeakCycleDetector:
    """Locate crank cycle boundaries as consecutive peaks of the angle signal."""

    def __init__(self, buffer_height: float = PEAK_HEIGHT_FRACTION):
        """Initialize detector.

        Args:
            buffer_height: Peaks must exceed ``buffer_height * max(angle)``.
        """
        self.buffer_height = buffer_height

    def find_peaks(self, angle: Optional[np.ndarray]) -> np.ndarray:
        """Return strictly increasing indices of the qualifying angle peaks.

        Args:
            angle: Crank angle samples.

        Returns:
            Integer array of peak indices (possibly empty).

        Raises:
            MissingInputError: If ``angle`` is absent.
        """
        if angle is None:
            raise MissingInputError("No angle data input. Please input angle data to analyze")

        angle = np.asarray(angle, dtype=float)
        if angle.size < 3:
            return np.array([], dtype=int)

        min_height = float(np.max(angle)) * self.buffer_height
        peaks, _ = find_peaks(angle, height=min_height)
        # find_peaks reports peaks >= height; the threshold is exclusive
        peaks = peaks[angle[peaks] > min_height]
        return peaks.astype(int)

    def detect(self, angle: Optional[np.ndarray]) -> list[CycleBoundary]:
        """Return one boundary per pair of adjacent peaks.

        Fewer than two peaks yields an empty list.
        """
        peaks = self.find_peaks(angle)
        if len(peaks) < 2:
            logger.warning(
                f"Found {len(peaks)} angle peak(s); at least 2 are needed for one crank cycle"
            )
            return []

        boundaries = [
            CycleBoundary(int(start), int(end)) for start, end in zip(peaks[:-1], peaks[1:])
        ]
        logger.info(f"Detected {len(peaks)} angle peaks -> {len(boundaries)} crank cycles")
        return boundaries


def detect_crank_cycles(
    angle: Optional[np.ndarray],
    buffer_height: float = PEAK_HEIGHT_FRACTION,
) -> list[CycleBoundary]:
    """Convenience function to detect crank cycle boundaries."""
    return PeakCycleDetector(buffer_height=buffer_height).detect(angle)
