from __future__ import annotations

from smarttube.domain.services.feature_limits import FEATURE_KEYS, SUPPORT
from smarttube.domain.services.plan_catalog import DEFAULT_PLANS, plan_catalog_sync


def test_default_plans_cover_every_feature():
    for template in DEFAULT_PLANS:
        assert set(template.features) == set(FEATURE_KEYS)

    pro = DEFAULT_PLANS[-1]
    assert pro.name == "Pro"
    assert pro.features[SUPPORT] == 2
    assert all(value == -1 for key, value in pro.features.items() if key != SUPPORT)


def test_sync_updates_inserts_and_retires():
    sync = plan_catalog_sync({"Free": "p-free", "Starter": "p-starter", "Old (Legacy)": "p-old"})

    assert [template.name for template in sync.updates.values()] == ["Free"]
    assert "p-free" in sync.updates
    assert [template.name for template in sync.inserts] == ["Basic", "Pro"]
    assert sync.retire == {"p-starter": "Starter (Legacy)"}
