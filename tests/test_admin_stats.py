from __future__ import annotations

from smarttube.domain.services.admin_stats import growth_rate


def test_growth_rate_percent_change():
    assert growth_rate(current=150, previous=100) == 50
    assert growth_rate(current=50, previous=100) == -50


def test_growth_rate_from_zero_previous():
    assert growth_rate(current=3, previous=0) == 100
    assert growth_rate(current=0, previous=0) == 0
