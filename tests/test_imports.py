def test_import_pokecatch_package() -> None:
    import importlib

    module = importlib.import_module("pokecatch")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from pokecatch.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_import_cli_app_without_starting() -> None:
    from pokecatch.presentation.cli import app

    assert callable(app.main)
