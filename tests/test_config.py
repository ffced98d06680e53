import pytest

from recipe_utils.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.db_path == "data/recipes.db"
    assert settings.acceptance_floor == 0.3
    assert settings.exact_threshold == 0.95
    assert settings.batch_size == 5
    assert settings.batch_delay == 2.0
    assert settings.max_retries == 1
    assert settings.max_workers == 1


def test_from_env():
    settings = Settings.from_env(
        {
            "RECIPE_UTILS_DB_PATH": "/tmp/recipes.db",
            "RECIPE_UTILS_ACCEPTANCE_FLOOR": "0.5",
            "RECIPE_UTILS_BATCH_SIZE": "10",
            "RECIPE_UTILS_BATCH_DELAY": "0",
            "RECIPE_UTILS_MAX_WORKERS": " 4 ",
            "RECIPE_UTILS_MAX_RETRIES": "",
        }
    )
    assert settings.db_path == "/tmp/recipes.db"
    assert settings.acceptance_floor == 0.5
    assert settings.batch_size == 10
    assert settings.batch_delay == 0.0
    assert settings.max_workers == 4
    assert settings.max_retries == 1


def test_from_os_environ(monkeypatch):
    monkeypatch.setenv("RECIPE_UTILS_EXACT_THRESHOLD", "0.9")
    assert Settings.from_env().exact_threshold == 0.9


@pytest.mark.parametrize(
    "name, value",
    [("RECIPE_UTILS_BATCH_SIZE", "five"), ("RECIPE_UTILS_ACCEPTANCE_FLOOR", "high")],
)
def test_invalid_values_name_the_variable(name, value):
    with pytest.raises(ValueError, match=name):
        Settings.from_env({name: value})


def test_analysis_options():
    options = Settings(acceptance_floor=0.4, max_workers=2).analysis_options()
    assert options == {"acceptance_floor": 0.4, "exact_threshold": 0.95, "max_workers": 2}
