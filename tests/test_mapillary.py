"""Tests for the Mapillary panorama lookup."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from unittest.mock import Mock, patch

import pytest
import requests

from map_directions.datasources.mapillary import MapillaryPanoramaProvider, fetch_images, parse_scene
from map_directions.errors import PanoramaUnavailableError
from map_directions.schemas import GeoPoint

QUAY = GeoPoint(latitude=-31.956956, longitude=115.855986)

IMAGE = {
    "id": "1234567890",
    "captured_at": 1_700_000_000_000,
    "computed_geometry": {"type": "Point", "coordinates": [115.85601, -31.95693]},
    "is_pano": True,
}


class TestFetchImages:
    """Graph API request."""

    @patch("map_directions.datasources.mapillary.panorama.session.get")
    def test_request_params(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.json.return_value = {"data": [IMAGE]}
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        images = fetch_images(QUAY, "MLY|token", radius_deg=0.001)

        assert images == [IMAGE]
        params = mock_get.call_args.kwargs["params"]
        assert params["access_token"] == "MLY|token"
        assert params["is_pano"] == "true"
        assert params["limit"] == 1
        assert params["bbox"] == "115.854986,-31.957956,115.856986,-31.955956"

    @patch("map_directions.datasources.mapillary.panorama.session.get")
    def test_missing_data_key(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.json.return_value = {}
        mock_get.return_value = mock_response

        assert fetch_images(QUAY, "token") == []

    @patch("map_directions.datasources.mapillary.panorama.session.get")
    def test_non_object_body(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.json.return_value = ["not", "an", "object"]
        mock_get.return_value = mock_response

        with pytest.raises(ValueError, match="unexpected response body"):
            fetch_images(QUAY, "token")


class TestParseScene:
    """Graph API record → PanoramaScene."""

    def test_parse(self) -> None:
        scene = parse_scene(IMAGE, QUAY)

        assert scene.image_id == "1234567890"
        assert scene.coordinate == GeoPoint(latitude=-31.95693, longitude=115.85601)
        assert scene.captured_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert scene.url.endswith("pKey=1234567890")

    def test_falls_back_to_query_point(self) -> None:
        scene = parse_scene({"id": 42}, QUAY)

        assert scene.coordinate == QUAY
        assert scene.captured_at is None
        assert scene.image_id == "42"


class TestMapillaryPanoramaProvider:
    """Async adapter and its failure modes."""

    def test_no_token(self) -> None:
        provider = MapillaryPanoramaProvider(token=None)

        with pytest.raises(PanoramaUnavailableError, match="token"):
            asyncio.run(provider.find_scene(QUAY))

    @patch("map_directions.datasources.mapillary.panorama.fetch_images")
    def test_finds_scene(self, mock_fetch: Mock) -> None:
        mock_fetch.return_value = [IMAGE]
        provider = MapillaryPanoramaProvider(token="token", radius_deg=0.002)

        scene = asyncio.run(provider.find_scene(QUAY))

        assert scene.image_id == "1234567890"
        mock_fetch.assert_called_once_with(QUAY, "token", radius_deg=0.002)

    @patch("map_directions.datasources.mapillary.panorama.fetch_images")
    def test_no_imagery(self, mock_fetch: Mock) -> None:
        mock_fetch.return_value = []
        provider = MapillaryPanoramaProvider(token="token")

        with pytest.raises(PanoramaUnavailableError, match="no imagery"):
            asyncio.run(provider.find_scene(QUAY))

    @patch("map_directions.datasources.mapillary.panorama.fetch_images")
    def test_http_error(self, mock_fetch: Mock) -> None:
        mock_fetch.side_effect = requests.HTTPError("401 Unauthorized")
        provider = MapillaryPanoramaProvider(token="bad")

        with pytest.raises(PanoramaUnavailableError, match="401"):
            asyncio.run(provider.find_scene(QUAY))

    @pytest.mark.parametrize(
        "image",
        [
            {},
            "1234567890",
            {"id": "1", "computed_geometry": {"coordinates": [115.85, -95.0]}},
            {"id": "1", "computed_geometry": "POINT (115.85 -31.95)"},
            {"id": "1", "captured_at": "yesterday"},
        ],
    )
    @patch("map_directions.datasources.mapillary.panorama.fetch_images")
    def test_malformed_record(self, mock_fetch: Mock, image: object) -> None:
        mock_fetch.return_value = [image]
        provider = MapillaryPanoramaProvider(token="token")

        with pytest.raises(PanoramaUnavailableError, match="malformed image record"):
            asyncio.run(provider.find_scene(QUAY))

    @patch("map_directions.datasources.mapillary.panorama.session.get")
    def test_non_object_body(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.json.return_value = []
        mock_get.return_value = mock_response
        provider = MapillaryPanoramaProvider(token="token")

        with pytest.raises(PanoramaUnavailableError, match="lookup failed"):
            asyncio.run(provider.find_scene(QUAY))
