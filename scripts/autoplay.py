"""
Headless autoplay across every funding path.

Plays one venture per starting path for a year with a simple greedy policy
(build available features, scale when needed, hire while runway is long,
market when flush, pitch whenever an offer is on the table) and prints a
summary table.
"""

from typing import List

from tycoon import (
    VentureSimulation, StartupType, StartingPath, FeatureStatus, evaluate_pitch
)
from tycoon.loader import default_catalog
from tycoon.metrics import runway_days
from tycoon.workforce import recruiting_fee


DAYS = 365
SEED = 42
SALARIES = {r.role: r.salary for r in default_catalog().roles}


def play_turn(sim: VentureSimulation):
    """Take every action the greedy policy wants for the current day."""
    state = sim.state

    for feature in state.features:
        if feature.status in (FeatureStatus.AVAILABLE, FeatureStatus.NEEDS_SCALE):
            sim.develop(feature.id)

    runway = runway_days(sim.state)
    if (runway is None or runway > 180) and len(sim.state.team) < 6 and not sim.state.hiring_queue:
        role = "Senior Dev" if sim.state.cash > 150000 else "Junior Dev"
        salary = SALARIES[role]
        if sim.state.cash >= recruiting_fee(salary):
            sim.hire(role, salary)

    for channel in sim.state.marketing_channels:
        if not channel.unlocked and sim.state.cash > 60000:
            sim.unlock_channel(channel.id)
        elif channel.unlocked and channel.fatigue > 0.5 and sim.state.cash > 40000:
            sim.run_campaign(channel.id)

    if evaluate_pitch(sim.state).passed and sim.state.equity > 40:
        sim.pitch(accept=True)


def run_path(path: StartingPath) -> dict:
    sim = VentureSimulation(f"Autoplay {path.value}", StartupType.SAAS, path, seed=SEED, verbose=False)

    for _ in range(DAYS):
        if sim.state.is_game_over:
            break
        play_turn(sim)
        sim.tick()

    snapshot = sim.get_snapshot()
    metrics = snapshot['metrics']
    return {
        'path': path.value,
        'day': metrics['day'],
        'cash': metrics['cash'],
        'users': metrics['users'],
        'valuation': metrics['valuation'],
        'equity': metrics['equity'],
        'team': metrics['team_size'],
        'bankrupt': sim.state.is_game_over,
        'avg_tick_ms': snapshot['timing']['avg_tick_time_ms'],
    }


def main():
    """Run every starting path and print the summary table."""
    print("=" * 80)
    print(f"Autoplay: SaaS venture, {DAYS} days, seed {SEED}")
    print("=" * 80)
    print()

    results: List[dict] = []
    for path in StartingPath:
        print(f"[{path.value}]")
        result = run_path(path)
        status = "BANKRUPT" if result['bankrupt'] else "alive"
        print(f"  day {result['day']}, {status}, avg tick {result['avg_tick_ms']:.3f}ms")
        results.append(result)

    print()
    print("| Path | Day | Cash | Users | Valuation | Equity | Team |")
    print("|------|-----|------|-------|-----------|--------|------|")
    for r in results:
        print(f"| {r['path']:11s} | {r['day']:3d} | {r['cash']:12,.0f} | {r['users']:7d} | "
              f"{r['valuation']:12,.0f} | {r['equity']:5.0f}% | {r['team']:2d} |")

    print()
    print("=" * 80)


if __name__ == '__main__':
    main()
