"""Tests for the LibreLinkUp data client."""

import asyncio

import aiohttp
import pytest

from librelink_tray.client import LibreLinkUpDataClient
from librelink_tray.const import API_ENDPOINTS, NO_DATA_MESSAGE, PRODUCT, VERSION
from librelink_tray.exceptions import DataFetchError, NoDataError
from librelink_tray.models import Region

from .conftest import make_response


@pytest.fixture
def data_client(mock_session):
    return LibreLinkUpDataClient(session=mock_session)


class TestFetchLatestMeasurement:
    """Tests for fetch_latest_measurement."""

    @pytest.mark.asyncio
    async def test_returns_first_measurement_verbatim(
        self, data_client, mock_session, connections_response
    ):
        """Test that the first connection's measurement is passed through."""
        connections_response["data"].append({"glucoseMeasurement": {"value": 250}})
        context, _ = make_response(json_data=connections_response)
        mock_session.get.return_value = context

        measurement = await data_client.fetch_latest_measurement("T", Region.EU)

        assert measurement == {"value": 110}
        assert measurement is connections_response["data"][0]["glucoseMeasurement"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("region", list(Region))
    async def test_request_url_and_headers(
        self, data_client, mock_session, connections_response, region
    ):
        """Test the bearer header and the region data URL."""
        context, _ = make_response(json_data=connections_response)
        mock_session.get.return_value = context

        await data_client.fetch_latest_measurement("T", region)

        args, kwargs = mock_session.get.call_args
        assert args[0] == API_ENDPOINTS[region].data
        assert kwargs["headers"] == {
            "Authorization": "Bearer T",
            "product": PRODUCT,
            "version": VERSION,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,reason", [(401, "Unauthorized"), (500, "Internal Server Error")])
    async def test_http_error_does_not_parse_body(
        self, data_client, mock_session, status, reason
    ):
        """Test that a non-success status raises without reading the body."""
        context, response = make_response(status=status, reason=reason)
        mock_session.get.return_value = context

        with pytest.raises(DataFetchError) as exc_info:
            await data_client.fetch_latest_measurement("T", Region.US)

        assert exc_info.value.status == status
        assert exc_info.value.message == f"Failed to fetch glucose data: {status} {reason}"
        response.json.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"data": []},
            {"data": None},
            {"data": [{"patientId": "p"}]},
        ],
    )
    async def test_no_data(self, data_client, mock_session, body):
        """Test that an empty result is a NoDataError, not an HTTP failure."""
        context, _ = make_response(json_data=body)
        mock_session.get.return_value = context

        with pytest.raises(NoDataError) as exc_info:
            await data_client.fetch_latest_measurement("T", Region.EU)

        assert not isinstance(exc_info.value, DataFetchError)
        assert exc_info.value.message == NO_DATA_MESSAGE

    @pytest.mark.asyncio
    async def test_transport_error(self, data_client, mock_session):
        """Test that a connection error becomes a DataFetchError."""
        mock_session.get.side_effect = aiohttp.ClientConnectionError("reset by peer")

        with pytest.raises(DataFetchError) as exc_info:
            await data_client.fetch_latest_measurement("T", Region.EU)

        assert exc_info.value.status is None
        assert "reset by peer" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout(self, data_client, mock_session):
        """Test data request timeout handling."""
        mock_session.get.side_effect = asyncio.TimeoutError()

        with pytest.raises(DataFetchError) as exc_info:
            await data_client.fetch_latest_measurement("T", Region.EU)

        assert exc_info.value.status is None
        assert mock_session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_invalid_json(self, data_client, mock_session):
        """Test that an unparseable 2xx body counts as no data."""
        context, response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_session.get.return_value = context

        with pytest.raises(NoDataError):
            await data_client.fetch_latest_measurement("T", Region.EU)

    @pytest.mark.asyncio
    async def test_request_value_error_is_not_no_data(self, data_client, mock_session):
        """Test that a ValueError before any response is not mistaken for an empty body."""
        mock_session.get.side_effect = ValueError("Newline or carriage return detected in headers")

        with pytest.raises(ValueError) as exc_info:
            await data_client.fetch_latest_measurement("T\r\n", Region.EU)

        assert not isinstance(exc_info.value, NoDataError)
