"""Shared pytest setup: Hypothesis profiles and the fuzz marker.

Profiles (HYPOTHESIS_PROFILE overrides, CI=true selects "ci", else "dev"):
    dev      500 examples per property
    ci       50 examples, derandomized so failures reproduce on rerun
    verbose  100 examples with Hypothesis progress output

Property tests in test_uri_fuzzing.py carry @pytest.mark.fuzz and are
skipped unless selected with `pytest -m fuzz` or by naming the file.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)
_PROFILES = {
    "dev": {"max_examples": 500},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_PHASES, **_options)


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "fuzz: long-running grammar fuzzing, skipped unless selected"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests in ordinary runs."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("test_uri_fuzzing" in str(arg) for arg in config.invocation_params.args):
        return

    skip = pytest.mark.skip(reason="fuzzing test; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)
