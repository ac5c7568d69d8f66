import pytest

from routine_api.app.utils.user_agent import parse_device
from routine_api.app.utils.validators import is_valid_date, is_valid_email, is_valid_time


@pytest.mark.parametrize("value", ["2024-3-5", "2024-03-05", "2024-02-29", "1999-12-31"])
def test_valid_dates(value):
    assert is_valid_date(value)


@pytest.mark.parametrize("value", ["2023-02-29", "2024-13-01", "2024-4-31", "24-01-01", "2024/01/01", "2024-3-15\n", "", None])
def test_invalid_dates(value):
    assert not is_valid_date(value)


@pytest.mark.parametrize("value", ["00:00", "09:30", "23:59"])
def test_valid_times(value):
    assert is_valid_time(value)


@pytest.mark.parametrize("value", ["24:00", "9:30", "12:60", "noon", "09:30\n", None])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_email_pattern():
    assert is_valid_email("jane.doe@example.co.uk")
    assert not is_valid_email("jane@localhost")
    assert not is_valid_email("not-an-email")
    assert not is_valid_email("jane@example.com\n")


def test_parse_device_without_header():
    device = parse_device(None)
    assert device.os_label == "Unknown OS"
    assert device.browser_label == "Unknown Browser"


def test_parse_device_desktop_chrome():
    ua = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    device = parse_device(ua)
    assert device.os_name == "Windows"
    assert device.browser_name == "Chrome"
    assert device.browser_label.startswith("Chrome-120")
