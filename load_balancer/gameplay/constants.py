"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.

Times are in milliseconds unless the name says otherwise.
Positions are normalized to the play field (0.0 - 1.0).
"""

# =============================================================================
# SESSION
# =============================================================================
SERVER_COUNT = 4
INITIAL_LIVES = 10
INITIAL_MONEY = 0
INITIAL_WAVE = 1
MAX_FRAME_MS = 100.0          # dt clamp after a stalled frame

HIGH_SCORE_KEY = "lbp_highscore"

# =============================================================================
# GATEWAY
# =============================================================================
GATEWAY_Y = 0.75              # 75% down the play field
GATEWAY_WIDTH = 0.15          # 15% of the field width
GATEWAY_BAND_HEIGHT = 0.02    # capture band is [GATEWAY_Y, GATEWAY_Y + this]

# =============================================================================
# SPAWNING / DIFFICULTY
# =============================================================================
SPAWN_INTERVAL_INITIAL = 1500.0
SPAWN_INTERVAL_MIN = 200.0
SPAWN_INTERVAL_DECAY = 0.9    # applied once per wave
WAVE_INTERVAL = 15000.0

SPAWN_X_MIN = 0.05
SPAWN_X_MAX = 0.95
SPAWN_Y = -0.1                # just above the visible field
MISS_Y = 1.0

HEAVY_CHANCE = 0.1
BASE_SPEED_MIN = 0.0003       # field heights per ms
BASE_SPEED_RANGE = 0.0002
WAVE_SPEED_STEP = 0.15        # multiplier = 1 + wave * step

STANDARD_VALUE = 10
STANDARD_HEAT = 10.0
HEAVY_VALUE = 20
HEAVY_HEAT = 30.0

# =============================================================================
# SERVERS
# =============================================================================
SERVER_MAX_HEAT = 100.0
SERVER_COOLING_RATE = 15.0    # heat per second
SERVER_PROCESSING_POWER = 15.0
HEAT_SCALE = 100.0            # heat gain = generated / (HEAT_SCALE / power)
REBOOT_SECONDS = 5.0
REBOOT_WARM_RATIO = 0.5       # heat after a natural reboot, as fraction of max
OVERHEAT_DISPLAY_RATIO = 0.8  # display hint only

# =============================================================================
# ECONOMY
# =============================================================================
COOLING_COST = 100
CAPACITY_COST = 150
REPAIR_COST = 500
COOLING_STEP = 5.0
CAPACITY_STEP = 2.0
MIN_PROCESSING_POWER = 5.0

# =============================================================================
# PARTICLES
# =============================================================================
PARTICLE_SPREAD = 0.015
PARTICLE_DECAY = 0.02         # life lost per tick

BURST_DELIVERED = 5
BURST_DROPPED = 8
BURST_MISSED = 5
BURST_OVERHEAT = 20

COLOR_PACKET_STANDARD = (56, 189, 248)
COLOR_PACKET_HEAVY = (244, 114, 182)
COLOR_SUCCESS = (74, 222, 128)
COLOR_EXPLOSION = (239, 68, 68)
