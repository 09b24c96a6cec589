from __future__ import annotations

import pytest

from app.core.errors import EmptyForecastError, MalformedResponse
from app.models.weather import ForecastEntry
from app.services.forecast import aggregate, parse_forecast, summarize_entries
from tests.fakes import forecast_payload


def test_aggregate_average_hottest_and_coldest() -> None:
    raw = forecast_payload(
        "London",
        [
            ("2024-01-15 12:00:00", 288.15),
            ("2024-01-16 12:00:00", 293.15),
            ("2024-01-17 12:00:00", 283.15),
        ],
    )

    summary = aggregate(raw)

    assert summary.city == "London"
    assert summary.average_temperature == pytest.approx(15.0)
    assert summary.hottest_day == "2024-01-16"
    assert summary.coldest_day == "2024-01-17"


def test_single_entry_is_hottest_and_coldest() -> None:
    entry = ForecastEntry(timestamp_text="2024-03-01 09:00:00", temperature_kelvin=275.4)

    summary = summarize_entries("Oslo", [entry])

    assert summary.hottest_day == summary.coldest_day == "2024-03-01"
    assert summary.average_temperature == entry.temperature_celsius


def test_ties_keep_first_entry_in_scan_order() -> None:
    entries = [
        ForecastEntry("2024-01-20 00:00:00", 280.0),
        ForecastEntry("2024-01-18 00:00:00", 290.0),
        ForecastEntry("2024-01-19 00:00:00", 290.0),
        ForecastEntry("2024-01-21 00:00:00", 280.0),
    ]

    summary = summarize_entries("Anywhere", entries)

    assert summary.hottest_day == "2024-01-18"
    assert summary.coldest_day == "2024-01-20"


def test_all_negative_temperatures_still_have_hottest_day() -> None:
    entries = [
        ForecastEntry("2024-02-01 00:00:00", 260.15),
        ForecastEntry("2024-02-02 00:00:00", 263.15),
    ]

    summary = summarize_entries("Moscow", entries)

    assert summary.hottest_day == "2024-02-02"
    assert summary.coldest_day == "2024-02-01"
    assert summary.average_temperature == pytest.approx(-11.5)


def test_average_matches_arithmetic_mean() -> None:
    kelvins = [271.3, 280.9, 266.0, 301.25, 285.5, 279.99]
    entries = [
        ForecastEntry(f"2024-05-0{i + 1} 12:00:00", k) for i, k in enumerate(kelvins)
    ]

    summary = summarize_entries("Somewhere", entries)

    expected = sum(k - 273.15 for k in kelvins) / len(kelvins)
    assert summary.average_temperature == pytest.approx(expected)


def test_city_name_comes_from_provider() -> None:
    raw = forecast_payload("São Paulo", [("2024-01-15 12:00:00", 300.0)])

    assert aggregate(raw).city == "São Paulo"


def test_parse_forecast_reads_entries() -> None:
    raw = forecast_payload(
        "London", [("2024-01-15 12:00:00", 288.15), ("2024-01-15 15:00:00", 289)]
    )

    city, entries = parse_forecast(raw)

    assert city == "London"
    assert entries == [
        ForecastEntry("2024-01-15 12:00:00", 288.15),
        ForecastEntry("2024-01-15 15:00:00", 289.0),
    ]
    assert entries[0].date == "2024-01-15"


def test_empty_forecast_list_is_rejected() -> None:
    raw = forecast_payload("Nowhere", [])

    with pytest.raises(EmptyForecastError):
        aggregate(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"list": []}',
        '{"city": {"name": "X"}}',
        '{"city": {"name": "X"}, "list": [{"dt_txt": "2024-01-01 00:00:00"}]}',
        '{"city": {"name": "X"}, "list": [{"dt_txt": "2024-01-01 00:00:00", "main": {"temp": NaN}}]}',
        '{"city": {"name": "X"}, "list": [{"dt_txt": "2024-01-01 00:00:00", "main": {"temp": Infinity}}]}',
    ],
)
def test_malformed_documents_are_rejected(raw: str) -> None:
    with pytest.raises(MalformedResponse):
        aggregate(raw)
