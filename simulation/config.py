# simulation/config.py
"""
Configuration constants for the simulation domain.
Includes physics, settling, relaxation and stability tuning values.
"""
from __future__ import annotations

# =============================================================================
# PARTICLE PHYSICS
# =============================================================================
GRAVITY = 0.34                    # Downward acceleration (px / tick^2)
VELOCITY_DAMPING = 0.997          # Per-tick velocity multiplier
OUT_OF_BOUNDS_MARGIN = 400.0      # Particles this far past the left/right/bottom edge are dropped
PARTICLE_MAX_LIFETIME_MS = 9000.0 # Particles older than this are force-settled

# Ground contact
BOUNCE_SPEED_THRESHOLD = 1.0      # Faster vertical impacts bounce instead of settling
BOUNCE_RESTITUTION = -0.08        # Very small bounce

# =============================================================================
# COLLISION / REPULSION
# =============================================================================
COLLIDE_STRENGTH = 0.28           # Base impulse strength against mobile grains
LATERAL_STRENGTH = 0.55           # Scale for lateral nudges
COLLISION_RANGE_FACTOR = 1.6      # Contact distance = (r1 + r2) * factor
COLLISION_SCAN_DEPTH = 4          # Only the topmost grains of a column can be hit
GRAIN_YIELD = 0.03                # Reciprocal displacement applied to a hit grain
COLLISION_VELOCITY_DAMPING = 0.99

FROZEN_PROBE_DEPTH = 2            # Pixels probed below a particle in the frozen layer
FROZEN_ALPHA_THRESHOLD = 12       # Alpha above this counts as frozen terrain
FROZEN_REPULSION = 0.12           # Upward velocity correction
FROZEN_JITTER = 0.04              # Random horizontal jitter on repulsion

# =============================================================================
# SETTLING
# =============================================================================
HEIGHT_BIAS_THRESHOLD = 6.0       # Center must exceed a neighbour by this much (px) before rejecting
HEIGHT_REJECT_MAX_PROB = 0.9      # Max reject probability from relative height
HEIGHT_REJECT_WINDOW = 4.0        # Excess is scaled over THRESHOLD * WINDOW
ABS_HEIGHT_FRACTION = 0.85        # Absolute-height bias saturates at this fraction of the viewport
ABS_BIAS_MIN = 0.6                # Multiplier for an empty column
REJECT_PROB_CAP = 0.98
LATERAL_OVERRIDE = 0.2            # Lateral bias beyond this picks the side
SNAP_SPREAD = 0.8                 # Grain x jitter as a fraction of column width
SNAP_FINE_JITTER = 0.4

# Lateral bias helpers
LATERAL_HEIGHT_MARGIN = 0.5
LATERAL_VELOCITY_OVERRIDE = 0.25
LATERAL_NOISE = 0.2
GRAIN_LATERAL_MARGIN = 0.3
GRAIN_LATERAL_PUSH = 0.6
GRAIN_LATERAL_NOISE = 0.04

# =============================================================================
# RELAXATION
# =============================================================================
CRITICAL_SLOPE = 1.0              # Adjacent height difference tolerated (px)
RELAX_PASSES = 3                  # Passes per relaxation step
RELAX_INTERVAL_TICKS = 1          # Relaxation runs every N ticks
HEIGHT_TRANSFER_STEP = 0.6        # Abstract height moved when no grain can migrate

# =============================================================================
# STABILITY
# =============================================================================
GRAIN_LOCK_MS = 600.0             # Fresh or relocated grains cannot migrate for this long
GRAIN_STABILITY_INCREMENT = 0.045
GRAIN_STABILITY_THRESHOLD = 0.72
GRAIN_MAX_MOBILE_MS = 8000.0      # Grains freeze after this long regardless of stability
