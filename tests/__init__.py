"""gwt test package."""

try:
    import pytest
except Exception:
    pass
else:
    # Ensure assertion rewriting is active for shared helper modules that
    # contain assertion logic used by the scenario tests.
    pytest.register_assert_rewrite("tests.support.fakes")
