#!/usr/bin/env python3
"""
orbitsim Simulation Example
===========================

Runs a preset maneuver scenario and optionally plots the result.

Usage:
  python -m orbitsim.examples.run_simulation --preset transfer
  python -m orbitsim.examples.run_simulation --preset polar --plot polar.png
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from orbitsim.core.config import setup_logging
from orbitsim.scenarios import PRESET_COMMANDS, ManeuverScenario, create_preset_scenario


def plot_scenario(scenario: ManeuverScenario, out_png: Path, title: str = None):
    """Save altitude, speed and ground-plane trail plots."""
    # Force headless plotting
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    frames = scenario.history
    if not frames:
        return

    t_min = np.array([f.time_s for f in frames]) / 60.0
    alt_km = np.array([f.altitude_m for f in frames]) / 1000.0
    speed = np.array([f.speed_m_s for f in frames])
    xyz_km = np.array([f.position_m for f in frames]) / 1000.0

    fig, axs = plt.subplots(1, 3, figsize=(15, 5))
    fig.suptitle(title or f"Scenario: {scenario.config.name}")

    axs[0].plot(t_min, alt_km)
    axs[0].set_xlabel("Time (min)")
    axs[0].set_ylabel("Altitude (km)")
    axs[0].grid(True)

    axs[1].plot(t_min, speed)
    axs[1].set_xlabel("Time (min)")
    axs[1].set_ylabel("Speed (m/s)")
    axs[1].grid(True)

    # Authored orbits lie in the X-Z plane (up axis +Y)
    radius_km = scenario.simulator.body.radius_m / 1000.0
    axs[2].add_patch(plt.Circle((0, 0), radius_km, color="tab:blue", alpha=0.3))
    axs[2].plot(xyz_km[:, 0], xyz_km[:, 2])
    axs[2].set_xlabel("X (km)")
    axs[2].set_ylabel("Z (km)")
    axs[2].set_aspect("equal")
    axs[2].grid(True)

    fig.tight_layout(rect=(0, 0, 1, 0.95))
    fig.savefig(out_png, dpi=160)
    plt.close(fig)


def run_preset(name: str,
               duration_seconds: float = 6000.0,
               time_step_seconds: float = 10.0,
               plot: Optional[Path] = None) -> ManeuverScenario:
    """Run one preset and print its summary."""
    print("=" * 60)
    print(f"orbitsim preset: {name}")
    print("=" * 60)

    scenario = create_preset_scenario(name, duration_seconds, time_step_seconds)
    scenario.run()
    print(scenario.get_summary())

    for time_s, result in scenario.command_results:
        print(f"  t={time_s:7.1f}s  {result.maneuver:<26} {result.status.value:<8} {result.message}")

    if plot is not None:
        plot_scenario(scenario, plot)
        print(f"\nPlot written to {plot}")

    return scenario


def main(argv: Sequence[str] = None) -> int:
    parser = argparse.ArgumentParser(description="orbitsim scenario runner")
    parser.add_argument('--preset', choices=sorted(PRESET_COMMANDS), default='transfer',
                        help='Preset maneuver script')
    parser.add_argument('--duration', type=float, default=6000.0,
                        help='Simulated duration [s]')
    parser.add_argument('--dt', type=float, default=10.0, help='Frame time step [s]')
    parser.add_argument('--plot', type=Path, default=None, help='Write a PNG plot here')
    parser.add_argument('--verbose', action='store_true', help='Log maneuvers and events')

    args = parser.parse_args(argv)
    setup_logging(logging.INFO if args.verbose else logging.WARNING)

    run_preset(args.preset, args.duration, args.dt, args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
