"""Tests for static landmark data."""

from __future__ import annotations

import pytest

from map_directions.reference import INITIAL_REGION, LANDMARKS, get_landmark
from map_directions.reference.landmarks import HOME


class TestLandmarks:
    def test_keys_unique(self) -> None:
        keys = [landmark.key for landmark in LANDMARKS]
        assert len(keys) == len(set(keys))

    def test_lookup_case_insensitive(self) -> None:
        assert get_landmark(" Kings-Park ").name == "Kings Park & Botanic Garden"

    def test_unknown(self) -> None:
        with pytest.raises(KeyError):
            get_landmark("nowhere")


class TestInitialRegion:
    def test_centered_on_home(self) -> None:
        assert INITIAL_REGION.center == HOME

    def test_spans_1300_metres(self) -> None:
        assert INITIAL_REGION.latitude_delta == pytest.approx(1300 / 111_320)
        # Longitude degrees are shorter at -32°
        assert INITIAL_REGION.longitude_delta > INITIAL_REGION.latitude_delta
