from __future__ import annotations

import os

from hypothesis import HealthCheck, settings

_PROFILE_ENV = "HISTLINT_HYPOTHESIS_PROFILE"
_CI_PROFILE = "histlint_ci"
_DEEP_PROFILE = "histlint_deep"

settings.register_profile(
    _CI_PROFILE,
    derandomize=True,
    max_examples=50,
    deadline=None,
    print_blob=True,
)
# Long generated messages trip the too_slow health check at this size.
settings.register_profile(
    _DEEP_PROFILE,
    max_examples=1000,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)


def pytest_configure(config: object) -> None:
    del config
    settings.load_profile(os.environ.get(_PROFILE_ENV, _CI_PROFILE))
