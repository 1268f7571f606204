from invtrack.config import DEFAULT_API_URL, get_api_settings


def test_defaults_when_env_is_empty():
    s = get_api_settings({})
    assert s.base_url == DEFAULT_API_URL
    assert s.timeout_seconds == 10.0
    assert s.page_size == 12


def test_env_overrides_and_trailing_slash():
    s = get_api_settings({
        "INVTRACK_API_URL": "https://inv.example.com/api/",
        "INVTRACK_TIMEOUT": "3.5",
        "INVTRACK_PAGE_SIZE": "25",
    })
    assert s.base_url == "https://inv.example.com/api"
    assert s.timeout_seconds == 3.5
    assert s.page_size == 25


def test_invalid_numbers_fall_back():
    s = get_api_settings({"INVTRACK_TIMEOUT": "soon", "INVTRACK_PAGE_SIZE": "-4"})
    assert s.timeout_seconds == 10.0
    assert s.page_size == 12
