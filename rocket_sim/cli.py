"""
Rocket Flight Simulation - CLI

The single entry point for running the reference flight, exporting the
telemetry log and dumping the final telemetry snapshot.
"""

import argparse
import json
import logging
import sys

from . import constants as C
from .config import GUIDANCE_MODES, SimulationConfig
from .integrators import ORBIT_MODELS
from .main import run_flight
from .planet import EARTH, spherical_to_cartesian
from .telemetry import build_telemetry
from .vehicle import create_reference_rocket

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Rocket flight simulation (reference vehicle)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--lat", type=float, default=C.LAUNCH_LATITUDE,
                        help="Launch latitude (deg)")
    parser.add_argument("--lon", type=float, default=C.LAUNCH_LONGITUDE,
                        help="Launch longitude (deg)")
    parser.add_argument("--alt", type=float, default=C.LAUNCH_ALTITUDE,
                        help="Launch altitude above the mean radius (m)")
    parser.add_argument("--dt", type=float, default=C.DT,
                        help="Integration time step (s)")
    parser.add_argument("--max-time", type=float, default=C.MAX_TIME,
                        help="Simulated time limit (s)")
    parser.add_argument("--target-altitude", type=float, default=C.TARGET_ORBIT_ALTITUDE,
                        help="Target orbit altitude for the gravity turn (m)")
    parser.add_argument("--guidance", choices=GUIDANCE_MODES, default='vertical',
                        help="Pitch program")
    parser.add_argument("--orbit-model", choices=sorted(ORBIT_MODELS), default='predictor',
                        help="Orbit verdict used by the integrator")
    parser.add_argument("--csv", type=str, default=None,
                        help="Write the telemetry log to this CSV file")
    parser.add_argument("--json", action="store_true",
                        help="Print the final telemetry snapshot as JSON")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress verbose output")
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution flow."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = SimulationConfig(
            dt=args.dt,
            max_time=args.max_time,
            target_orbit_altitude=args.target_altitude,
            guidance=args.guidance,
            orbit_model=args.orbit_model,
            verbose=not args.quiet,
        )
        position = spherical_to_cartesian(args.lat, args.lon, args.alt, EARTH)

        logger.info("Starting simulation...")
        final_state, log, reason = run_flight(
            rocket=create_reference_rocket(),
            planet=EARTH,
            initial_position=position,
            config=config,
        )

        if not args.quiet:
            print("\n" + "=" * 60)
            print("SIMULATION SUMMARY")
            print("=" * 60)
            print(f"Termination reason: {reason}")
            print(f"Final time: {final_state.time:.2f} s")
            print(f"Final altitude: {final_state.altitude/1000:.2f} km")
            print(f"Final velocity: {final_state.speed:.2f} m/s")
            print("=" * 60 + "\n")

        if args.csv:
            log.to_csv(args.csv)
            logger.info(f"Telemetry log written to {args.csv}")

        if args.json:
            print(json.dumps(build_telemetry(final_state, EARTH), indent=2))

    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Simulation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
