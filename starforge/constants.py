"""Generation-wide constants for starforge."""

# --- Application ---
APP_NAME = "starforge"
SETTINGS_FILE_NAME = "settings.json"
NAME_SEQUENCE_FILE_NAME = "name_sequence.json"

# --- Stellar zones (AU per sqrt of solar luminosity) ---
HABITABLE_INNER_COEFFICIENT = 0.95
HABITABLE_OUTER_COEFFICIENT = 1.37
OPTIMISTIC_INNER_COEFFICIENT = 0.75
OPTIMISTIC_OUTER_COEFFICIENT = 1.77
FROSTLINE_COEFFICIENT = 4.85

# Band edges as multiples of the habitable inner/outer radius
INFERNAL_OUTER_MULTIPLIER = 0.5  # x inner
COLD_OUTER_MULTIPLIER = 2.0  # x outer

# Solar effective temperature, used to derive stellar radius
SOLAR_TEMPERATURE_K = 5772.0

# --- Companions ---
MAX_COMPANIONS = 3
COMPANION_CONTINUE_ROLL = 12  # Only a natural 12 earns another attempt

# --- Worlds ---
DEFAULT_TECH_LEVEL = 10
BASELINE_TECH_LEVEL = 7  # Tech levels above this add habitability and PVS
TECH_HABITABILITY_BONUS = 0.5  # Per tech level above baseline
HAZARD_PRESENCE_MODIFIER = -0.5
COMFORTABLE_MASS_RANGE = (0.5, 1.5)
MASS_EXTREMITY_MODIFIER = -1
ARTIFICIAL_GRAVITY = 1.0
MIN_HABITABILITY_FACTOR = 0.1

# --- Satellite bodies ---
ORBIT_POSITION_RANGE = (1, 20)
MOON_GRAVITY_PER_LUNAR_MASS = 0.165
ASTEROID_BELT_WIDTH_AU = 0.5
PLANETOID_BELT_WIDTH_AU = 1.0
DISK_ACCRETION_MAX_ROLL = 6  # 2D6 at or below this yields an accretion disk

# --- Default names ---
PRIMARY_NAME_PATTERN = "Star #{n}"
COMPANION_NAME_PATTERN = "Companion #{n}"
SYSTEM_NAME_PATTERN = "System #{n}"
