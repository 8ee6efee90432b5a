"""
Test state serialization and the VentureSimulation host.
"""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tycoon import (
    create_venture, advance_day, start_hiring, start_developing_feature,
    unlock_marketing_channel, run_marketing_campaign, VentureState, VentureSimulation,
    StartupType, StartingPath, FeatureStatus, InsufficientFunds
)
from tycoon.data_types import Catalog
from tycoon.loader import default_catalog
from tycoon.rng import SequenceRandom, VentureRng, make_seed
from tycoon.constants import TICK_TIME_WINDOW


def played_venture() -> VentureState:
    """Venture with a bit of everything: team, queue, features, fatigue"""
    rng = VentureRng(seed=7)
    state = create_venture("Snapshot Co", StartupType.GAMING, StartingPath.BANK_LOAN)
    state = start_hiring(state, 'Senior Dev', 8000, rng=rng).next_state
    state = start_developing_feature(state, 'core').next_state
    state = unlock_marketing_channel(state, 'content').next_state
    state = run_marketing_campaign(state, 'content').next_state
    for _ in range(5):
        state = advance_day(state, rng).next_state
    state = start_hiring(state, 'Designer', 6000, rng=rng).next_state
    state.office_rented = True
    return state


def test_round_trip():
    state = played_venture()
    restored = VentureState.from_dict(state.to_dict())

    print(f"Round trip: day={restored.day}, team={len(restored.team)}, "
          f"queue={len(restored.hiring_queue)}")
    assert restored == state
    assert restored is not state


def test_round_trip_through_json():
    state = played_venture()
    document = json.dumps(state.to_dict())
    restored = VentureState.from_dict(json.loads(document))

    assert restored == state
    assert restored.cash == state.cash
    assert restored.quarterly_growth == state.quarterly_growth
    assert [f.id for f in restored.features] == [f.id for f in state.features]


def test_to_dict_uses_plain_values():
    data = create_venture("Plain", StartupType.AI_ML, StartingPath.ANGEL).to_dict()

    assert data['startup_type'] == 'AI/ML'
    assert data['starting_path'] == 'Angel'
    assert data['market_condition'] == 'Steady'
    assert data['features'][0]['status'] == 'Available'
    assert data['features'][1]['status'] == 'Locked'


def test_unknown_startup_type_falls_back_to_saas():
    catalog = default_catalog()
    trimmed = Catalog(
        features={'SaaS': catalog.features['SaaS']},
        channels=catalog.channels,
        paths=catalog.paths,
        roles=catalog.roles,
        names=catalog.names,
    )
    state = create_venture("Fallback", StartupType.FINTECH, StartingPath.BOOTSTRAP, trimmed)
    assert [f.id for f in state.features] == ['auth', 'billing', 'analytics']


def test_blank_name_defaults():
    state = create_venture("", "SaaS", "Accelerator")
    assert state.company_name == "New Venture"
    assert state.starting_path == StartingPath.ACCELERATOR
    assert state.equity == 93


def test_make_seed_stable():
    assert make_seed(1, "Acme") == make_seed(1, "Acme")
    assert make_seed(1, "Acme") != make_seed(2, "Acme")

    a = VentureRng.for_venture(1, "Acme")
    b = VentureRng.for_venture(1, "Acme")
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


def test_sequence_random_exhaustion():
    rng = SequenceRandom([0.25])
    assert rng.random() == 0.25
    with pytest.raises(IndexError):
        rng.random()


def test_host_hiring_flow():
    sim = VentureSimulation("Host Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5), verbose=False)

    result = sim.hire('Senior Dev', 8000)
    assert result.ok
    assert sim.run(3) == 3

    assert sim.state.day == 4
    assert len(sim.state.team) == 1
    assert sim.state.team[0].name == 'Riley'
    assert sim.state.team[0].skill == 75
    assert any('joined' in e.message for e in sim.event_log)


def test_host_rejected_action_keeps_state():
    sim = VentureSimulation("Host Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5), verbose=False)
    before = sim.state

    result = sim.run_campaign('social')
    assert not result.ok
    assert sim.state is before

    sim.state.cash = 100
    result = sim.unlock_channel('social')
    assert isinstance(result.error, InsufficientFunds)


def test_host_stops_at_bankruptcy():
    sim = VentureSimulation("Doomed Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5), verbose=False)
    sim.state.cash = 25

    # Day 2: 25 - 10 = 15 and users 100 -> 101. Day 3: 101 users is the
    # 50/day server tier, so 15 - 50 ends the venture after two ticks.
    simulated = sim.run(10)
    assert simulated == 2
    assert sim.state.day == 3
    assert sim.state.is_game_over
    assert sim.tick() == []


def test_host_snapshot_and_resume():
    sim = VentureSimulation("Resume Co", StartupType.SAAS, StartingPath.ANGEL,
                            seed=99, verbose=False)
    sim.develop('auth')
    sim.run(10)

    snapshot = sim.get_snapshot()
    assert set(snapshot) == {'state', 'settings', 'metrics', 'events', 'timing'}
    assert snapshot['timing']['day'] == 11
    assert snapshot['timing']['avg_tick_time_ms'] > 0

    resumed = VentureSimulation.from_snapshot(json.loads(json.dumps(snapshot)), verbose=False)
    assert resumed.state == sim.state


def unlocking_host() -> VentureSimulation:
    sim = VentureSimulation("Resume Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5),
                            unlock_prerequisites=True, verbose=False)
    sim.state.find_feature('auth').status = FeatureStatus.LIVE
    return sim


def test_resume_keeps_prerequisite_unlocking():
    sim = unlocking_host()
    saved = json.loads(json.dumps(sim.get_snapshot()))
    assert saved['settings'] == {'unlock_prerequisites': True}

    resumed = VentureSimulation.from_snapshot(saved, rng=SequenceRandom([], fallback=0.5),
                                              verbose=False)
    assert resumed.unlock_prerequisites is True

    resumed.tick()
    assert resumed.state.find_feature('billing').status == FeatureStatus.AVAILABLE


def test_resume_overrides_and_catalog():
    sim = unlocking_host()
    catalog = default_catalog()
    saved = json.loads(json.dumps(sim.get_snapshot()))

    resumed = VentureSimulation.from_snapshot(saved, rng=SequenceRandom([], fallback=0.5),
                                              catalog=catalog, unlock_prerequisites=False,
                                              verbose=False)
    assert resumed.catalog is catalog
    assert resumed.unlock_prerequisites is False

    resumed.tick()
    assert resumed.state.find_feature('billing').status == FeatureStatus.LOCKED

    # A bare VentureState dict carries no settings and follows the default
    bare = VentureSimulation.from_snapshot(saved['state'], verbose=False)
    assert bare.unlock_prerequisites is None


def test_tick_stats_window():
    sim = VentureSimulation("Timing Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5), verbose=False)
    assert sim.get_tick_stats()['avg_tick_time_ms'] == 0.0

    sim.state.cash = 1e9
    sim.run(TICK_TIME_WINDOW + 20)

    stats = sim.get_tick_stats()
    assert len(sim._tick_times) == TICK_TIME_WINDOW
    assert stats['day'] == TICK_TIME_WINDOW + 21
    assert stats['last_tick_time_ms'] == pytest.approx(1000.0 * sim._tick_times[-1])


def test_host_prints_summary(capsys):
    sim = VentureSimulation("Loud Co", StartupType.SAAS, StartingPath.BOOTSTRAP,
                            rng=SequenceRandom([], fallback=0.5))
    sim.run(29)

    out = capsys.readouterr().out
    assert "[OK] Venture initialized: Loud Co" in out
    assert "Day   30" in out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
