import datetime as dt
import unittest

from fastapi.testclient import TestClient

from agroweather.data_sources import CallableWeatherDataSource
from agroweather.errors import UpstreamUnavailableError
from agroweather.main import app as fastapi_app
from agroweather.samples import CurrentConditions, IntervalSample

UTC = dt.timezone.utc


def _make_current() -> CurrentConditions:
    return CurrentConditions(
        timestamp=dt.datetime(2024, 6, 1, 12, 0, tzinfo=UTC),
        temperature_c=28.6,
        humidity_pct=72.0,
        wind_speed=2.4,
        cloud_coverage_pct=20.0,
        condition_code=801,
        condition_text="few clouds",
        rain_last_hour_mm=0.0,
    )


def _make_steps():
    start = dt.datetime(2024, 6, 1, 0, 0, tzinfo=UTC)
    return [
        IntervalSample(
            timestamp=start + dt.timedelta(hours=3 * i),
            temperature_c=22.0 + i,
            humidity_pct=70.0,
            precipitation_probability=0.6 if i == 2 else 0.1,
            wind_speed=2.0,
            cloud_coverage_pct=50.0,
            condition_code=500 if i < 5 else 800,
            condition_text="light rain" if i < 5 else "clear sky",
        )
        for i in range(10)
    ]


class TestApi(unittest.TestCase):
    def setUp(self):
        import agroweather.api as api_mod
        from agroweather.config import settings

        self.api_mod = api_mod
        self._orig_data_source = api_mod.DATA_SOURCE
        self._orig_api_key = settings.api_key
        settings.api_key = None
        api_mod.DATA_SOURCE = CallableWeatherDataSource(
            current=lambda lat, lon: _make_current(),
            forecast=lambda lat, lon: _make_steps(),
        )
        self.client = TestClient(fastapi_app)

    def tearDown(self):
        from agroweather.config import settings

        self.api_mod.DATA_SOURCE = self._orig_data_source
        settings.api_key = self._orig_api_key

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_current_200(self):
        resp = self.client.get("/v1/weather/current")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["condition"], "Clouds")
        self.assertEqual(body["data"]["uv_index"], 4.3)
        self.assertEqual(body["display"]["temperature"], "29 °C")

    def test_forecast_200(self):
        resp = self.client.get("/v1/weather/forecast")
        self.assertEqual(resp.status_code, 200)
        daily = resp.json()["data"]["daily"]
        self.assertEqual([d["date"] for d in daily], ["2024-06-01", "2024-06-02"])
        first = daily[0]
        self.assertEqual(first["condition"], "Rain")
        self.assertEqual(first["precipitation_probability_pct"], 60)
        self.assertEqual(first["temperature_min_c"], 22)
        self.assertEqual(first["temperature_max_c"], 29)
        self.assertIsNone(first["soil_moisture_pct"])

    def test_agricultural_200(self):
        resp = self.client.get("/v1/weather/agricultural")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertIsNotNone(data["current"]["soil_moisture_pct"])
        self.assertTrue(all(d["soil_moisture_pct"] is not None for d in data["forecast"]))
        self.assertIn("delaying", data["advice"]["weather"])

    def test_empty_forecast_404(self):
        self.api_mod.DATA_SOURCE = CallableWeatherDataSource(
            current=lambda lat, lon: _make_current(),
            forecast=lambda lat, lon: [],
        )
        resp = self.client.get("/v1/weather/forecast")
        self.assertEqual(resp.status_code, 404)

    def test_upstream_failure_503(self):
        def down(lat, lon):
            raise UpstreamUnavailableError("provider down")

        self.api_mod.DATA_SOURCE = CallableWeatherDataSource(current=down, forecast=down)
        resp = self.client.get("/v1/weather/current")
        self.assertEqual(resp.status_code, 503)
        self.assertIn("provider down", resp.json()["detail"])

    def test_malformed_current_502(self):
        bad = _make_current()
        bad.temperature_c = None
        self.api_mod.DATA_SOURCE = CallableWeatherDataSource(
            current=lambda lat, lon: bad,
            forecast=lambda lat, lon: _make_steps(),
        )
        resp = self.client.get("/v1/weather/agricultural")
        self.assertEqual(resp.status_code, 502)

    def test_requires_api_key_when_set(self):
        from agroweather.config import settings

        settings.api_key = "sekret"

        missing = self.client.get("/v1/weather/current")
        self.assertEqual(missing.status_code, 401)

        wrong = self.client.get("/v1/weather/current", headers={"X-API-Key": "nope"})
        self.assertEqual(wrong.status_code, 401)

        ok = self.client.get("/v1/weather/current", headers={"X-API-Key": "sekret"})
        self.assertEqual(ok.status_code, 200)


if __name__ == "__main__":
    unittest.main()
