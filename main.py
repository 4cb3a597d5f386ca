#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  KINEMATICS ENGINE: Demo Runner
═══════════════════════════════════════════════════════════════════════════════

  Walks through the engine the way a simulator host would use it:
    1. Forward trajectories for a set of reference launches
    2. Inverse queries (velocity / angle / height from a target)
    3. Degenerate queries and how they are reported
    4. Block forces on flat and inclined surfaces
    5. Block simulation driven frame by frame through tick(dt)
    6. Cross-check against numerical integration (scipy)

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip the numerical cross-check
    python main.py --debug      # DEBUG logging (solver iterations, clamps)
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from kinematics_engine import (
    LaunchConfig, LaunchMode, compute_trajectory, optimal_angle, max_range,
    Given, SolveFor, InverseQuery, solve,
    KinematicsError, NotSolvable,
    SurfaceConfig, compute_forces, critical_angle, min_force_up_incline,
    BlockSimulation, TrackBounds, clamp_frame_delta,
    GRAVITY_PRESETS, SURFACE_PRESETS, REFERENCE_LAUNCHES,
    run_all_validations, setup_logging,
)


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     KINEMATICS ENGINE                                                 ║
║     ─────────────────────────────────────────────────────             ║
║     Projectiles: closed form · inverse solving · root finding         ║
║     Blocks: static/kinetic friction · inclines · semi-implicit Euler  ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    logger = setup_logging(logging.DEBUG if '--debug' in sys.argv else logging.INFO)

    banner()

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Forward Trajectories
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Reference Launches")
    print(f"  {'Launch':<18} {'Range (m)':>10} {'Max H (m)':>10} {'ToF (s)':>8} {'Impact':>8}")
    for name, cfg in REFERENCE_LAUNCHES:
        sol = compute_trajectory(cfg)
        print(f"  {name:<18} {sol.range:>10.2f} {sol.max_height:>10.2f} "
              f"{sol.time_of_flight:>8.2f} {sol.impact_angle_deg:>7.1f}°")

    print(compute_trajectory(LaunchConfig(LaunchMode.ANGLED, 40.0, 45.0, 0.0, 9.8)).summary())

    print(f"  Best angle at 20 m/s on each body (from 10 m):")
    for body, g in GRAVITY_PRESETS.items():
        print(f"    {body:<16s}  θ* = {optimal_angle(20.0, 10.0, g):5.2f}°  "
              f"R_max = {max_range(20.0, 10.0, g):8.2f} m")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Inverse Queries
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Inverse Queries")

    base = LaunchConfig(LaunchMode.ANGLED, 40.0, 45.0, 0.0, 9.8)
    queries = [
        InverseQuery(Given.RANGE, SolveFor.VELOCITY, 163.27, base),
        InverseQuery(Given.MAX_HEIGHT, SolveFor.VELOCITY, 30.0, base),
        InverseQuery(Given.FLIGHT_TIME, SolveFor.VELOCITY, 4.0, base),
        InverseQuery(Given.RANGE, SolveFor.ANGLE, 120.0, base),
        InverseQuery(Given.FLIGHT_TIME, SolveFor.ANGLE, 3.0, base),
        InverseQuery(Given.RANGE, SolveFor.HEIGHT, 180.0, base),
        InverseQuery(Given.LAUNCH_HEIGHT, SolveFor.VELOCITY, 25.0, base),
    ]
    for q in queries:
        sol = solve(q)
        applied = compute_trajectory(sol.apply(q.fixed))
        print(f"  {q.given.value:>13} = {q.target:<7g} → {sol.message:<28s} "
              f"(check: R={applied.range:.2f} m, H={applied.max_height:.2f} m, "
              f"T={applied.time_of_flight:.2f} s)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Degenerate Queries
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Degenerate Queries")

    diving = LaunchConfig(LaunchMode.ANGLED, 30.0, -30.0, 20.0, 9.8)
    horizontal_ground = LaunchConfig(LaunchMode.HORIZONTAL, 10.0, 0.0, 0.0, 9.8)
    degenerate = [
        ("diving, max height → angle",
         InverseQuery(Given.MAX_HEIGHT, SolveFor.ANGLE, 10.0, diving)),
        ("range out of reach",
         InverseQuery(Given.RANGE, SolveFor.ANGLE, 500.0, base)),
        ("horizontal from ground",
         InverseQuery(Given.RANGE, SolveFor.VELOCITY, 30.0, horizontal_ground)),
        ("launch height → height",
         InverseQuery(Given.LAUNCH_HEIGHT, SolveFor.HEIGHT, 5.0, base)),
    ]
    for label, q in degenerate:
        try:
            sol = solve(q)
            print(f"  {label:<28s}  {sol.message}")
        except NotSolvable as e:
            print(f"  {label:<28s}  {type(e).__name__}: {e} (placeholder {e.placeholder})")
        except KinematicsError as e:
            print(f"  {label:<28s}  {type(e).__name__}: {e}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Block Forces
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Block Forces (m = 5 kg)")

    print(f"  {'Surface':<8} {'θc':>7} {'F up 30°':>9}   {'F=5 N flat':<12} {'F=20 N flat':<12}")
    for name, (mu_s, mu_k) in SURFACE_PRESETS.items():
        states = []
        for applied in (5.0, 20.0):
            surface = SurfaceConfig(mass=5.0, applied_force=applied).with_preset(name)
            states.append(compute_forces(surface, 0.0).state.value)
        print(f"  {name:<8} {critical_angle(mu_s):>6.2f}° "
              f"{min_force_up_incline(5.0, 9.8, 30.0, mu_s):>8.2f}N   "
              f"{states[0]:<12} {states[1]:<12}")

    incline = SurfaceConfig(mass=5.0, gravity=9.8, incline_deg=40.0,
                            mu_static=0.5, mu_kinetic=0.4)
    f = compute_forces(incline, 0.0)
    print(f"\n  40° incline, μs=0.5: {f.state.value}, "
          f"W∥={f.weight_parallel:.2f} N, N={f.normal:.2f} N, "
          f"friction={f.friction_force:+.2f} N, a={f.acceleration:+.3f} m/s²")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Block Simulation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Block Simulation (60 fps, tick(dt))")

    scenarios = [
        ("Push 20 N on wood", SurfaceConfig(mass=5.0, applied_force=20.0).with_preset('wood'), 0.0),
        ("Coast on ice", SurfaceConfig(mass=5.0).with_preset('ice'), 5.0),
        ("Slide down 40° slope", incline, 0.0),
    ]
    for label, surface, v0 in scenarios:
        sim = BlockSimulation(surface, TrackBounds(0.0, 20.0), initial_position=10.0)
        sim.state.velocity = v0
        for _ in range(600):
            result = sim.tick(clamp_frame_delta(1.0 / 60.0))
            if result.stopped or result.hit_boundary:
                break
        how = "stopped" if result.stopped else ("track end" if result.hit_boundary else "moving")
        print(f"  {label:<22s}  t={sim.elapsed:5.2f} s  x={sim.state.position:6.2f} m  "
              f"v={sim.state.velocity:+6.2f} m/s  [{how}, {sim.forces.state.value}]")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Numerical Cross-Check
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Cross-Check Against Numerical Integration")
        results = run_all_validations(verbose=True)
        failed = [r.name for rs in results.values() for r in rs if not r.passed()]
        if failed:
            logger.warning("validation mismatches: %s", ", ".join(failed))
    else:
        section("PHASE 6: Cross-Check SKIPPED (--quick mode)")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"\n  Total runtime: {elapsed:.2f} seconds\n")


if __name__ == "__main__":
    main()
